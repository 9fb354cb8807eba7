"""Pull a JSON value out of free-form model output."""

import json
import logging
import re
from typing import Any

from errors import MalformedResponseError

logger = logging.getLogger(__name__)

# First fenced block, optionally tagged as json:
#   "Here's the data:\n```json\n{\"name\": \"John\"}\n```\nHope this helps!"
_FENCED_BLOCK = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)\n?```")

# First "{" through the last "}":
#   "The user data is {\"name\": \"John\", \"age\": 30} as requested."
_BRACED_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json(text: str) -> Any:
    """Parse the JSON value embedded in ``text``.

    Tries, in order: the first fenced code block, the span from the first
    ``{`` to the last ``}``, then the whole stripped text. The first strategy
    that parses wins; only failure of the last one is reported.

    Raises:
        MalformedResponseError: If no strategy yields valid JSON
    """
    match = _FENCED_BLOCK.search(text)
    if match and match.group(1):
        try:
            return json.loads(match.group(1).strip())
        except json.JSONDecodeError as e:
            logger.debug("Fenced block is not valid JSON: %s", e)

    match = _BRACED_OBJECT.search(text)
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as e:
            logger.debug("Braced span is not valid JSON: %s", e)

    try:
        return json.loads(text.strip())
    except json.JSONDecodeError as e:
        raise MalformedResponseError(text) from e
