"""Exceptions raised by the agent and its loop."""

from typing import Any


class AgentError(Exception):
    """Base class for agent execution failures."""


class NoResponseError(AgentError):
    """The loop finished without producing any message."""

    def __init__(self) -> None:
        super().__init__("No response received")


class MalformedResponseError(AgentError):
    """The final response could not be parsed as JSON."""

    def __init__(self, raw_text: str) -> None:
        self.raw_text = raw_text
        super().__init__(f"Response is not valid JSON: {raw_text[:200]!r}")


class SchemaValidationError(AgentError):
    """The parsed response does not match the requested schema."""

    def __init__(self, schema: Any, value: Any, detail: str = "") -> None:
        self.schema = schema
        self.value = value
        message = "Response does not match schema"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class LoopError(AgentError):
    """The agent loop failed. The original exception is chained as ``__cause__``."""


class ExecutionCancelledError(AgentError):
    """The loop stopped at a checkpoint because cancellation was requested."""

    def __init__(self, step: int, reason: str | None = None) -> None:
        self.step = step
        self.reason = reason
        message = f"Execution cancelled at step {step}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ExecutionInProgressError(AgentError):
    """``execute()`` was called while another execution is still running."""

    def __init__(self) -> None:
        super().__init__("Another execution is already in progress on this agent")
