"""Message types returned by the agent loop."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from anthropic.types import TextBlock


class MessageRole(str, Enum):
    """Role in conversation message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class TextContent:
    """Text content part in a multimodal message."""

    text: str
    type: str = "text"


@dataclass(frozen=True, slots=True)
class ImageContent:
    """Image content part in a multimodal message."""

    data: str  # base64-encoded
    media_type: str  # e.g. "image/png"
    type: str = "image"


ContentPart = TextContent | ImageContent
MessageContent = str | Sequence[Any]


@dataclass(frozen=True, slots=True)
class ConversationMessage:
    """Single message in conversation history."""

    role: MessageRole
    content: MessageContent


def _block_text(block: Any) -> str:
    """Text carried by a content block, or "" for non-text blocks.

    Handles our dataclasses, Anthropic SDK blocks and raw API dicts.
    """
    if isinstance(block, (TextContent, TextBlock)):
        return block.text or ""
    if isinstance(block, Mapping):
        if block.get("type") != "text":
            return ""
        return block.get("text") or ""
    if getattr(block, "type", None) == "text":
        return getattr(block, "text", None) or ""
    return ""


def message_content(message: Any) -> Any:
    """Content of a message given as dataclass, SDK model or mapping."""
    if isinstance(message, Mapping):
        return message.get("content")
    return getattr(message, "content", None)


def extract_text(message: Any) -> str:
    """Extract plain text from a message.

    String content is returned unchanged. For a list of content blocks only
    text blocks contribute, concatenated in order.
    """
    content = message_content(message)
    if isinstance(content, str):
        return content
    if isinstance(content, Sequence):
        return "".join(_block_text(block) for block in content)
    return ""
