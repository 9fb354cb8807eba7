"""Agent configuration: execution behaviour and environment settings."""

import os
from dataclasses import dataclass, field
from typing import Any

DEFAULT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_THINKING_BUDGET = 1024


@dataclass(frozen=True, slots=True)
class ExecutionConfig:
    """Execution behaviour handed to the loop as is.

    The agent never reads these values; they only describe how the loop should
    drive the page.
    """

    typing_delay_ms: int = 12
    screenshot_delay_ms: int = 300
    screenshot_scale: float = 1.0
    mouse_move_steps: int = 1
    post_action_delay_ms: int = 2000
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class AgentSettings:
    """Settings read from the environment (``.env`` is loaded by the CLI)."""

    api_key: str
    model: str = DEFAULT_MODEL
    loop_spec: str | None = None

    @classmethod
    def from_env(cls) -> "AgentSettings":
        """Build settings from ANTHROPIC_API_KEY, AGENT_MODEL and AGENT_LOOP.

        Raises:
            ValueError: If ANTHROPIC_API_KEY is not set
        """
        api_key = os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable is not set")
        return cls(
            api_key=api_key,
            model=os.environ.get("AGENT_MODEL") or DEFAULT_MODEL,
            loop_spec=os.environ.get("AGENT_LOOP") or None,
        )
