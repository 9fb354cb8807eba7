"""Agent package: computer-use execution with external control."""

from .computer_use import ComputerUseAgent
from .config import AgentSettings, ExecutionConfig
from .controller import AgentController
from .extraction import extract_json
from .loop import AgentLoop, LoopRequest, load_loop
from .messages import ConversationMessage, ImageContent, MessageRole, TextContent, extract_text

__all__ = [
    "AgentController",
    "AgentLoop",
    "AgentSettings",
    "ComputerUseAgent",
    "ConversationMessage",
    "ExecutionConfig",
    "ImageContent",
    "LoopRequest",
    "MessageRole",
    "TextContent",
    "extract_json",
    "extract_text",
    "load_loop",
]
