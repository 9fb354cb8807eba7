"""Control signal and lifecycle event types."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ControlSignal(str, Enum):
    """Instruction sent by the caller to a running loop."""

    PAUSE = "pause"
    RESUME = "resume"
    CANCEL = "cancel"


class LifecycleEventName(str, Enum):
    """Notification families emitted by the loop."""

    ON_PAUSE = "on_pause"
    ON_RESUME = "on_resume"
    ON_CANCEL = "on_cancel"
    ON_ERROR = "on_error"


# camelCase aliases
_EVENT_ALIASES: dict[str, LifecycleEventName] = {
    "onPause": LifecycleEventName.ON_PAUSE,
    "onResume": LifecycleEventName.ON_RESUME,
    "onCancel": LifecycleEventName.ON_CANCEL,
    "onError": LifecycleEventName.ON_ERROR,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_signal(signal: "ControlSignal | str") -> ControlSignal:
    """Normalize a control signal given as enum or plain string.

    Raises:
        ValueError: If the name is not a known control signal
    """
    if isinstance(signal, ControlSignal):
        return signal
    try:
        return ControlSignal(signal)
    except ValueError:
        raise ValueError(
            f"Unknown control signal: {signal!r}. Expected one of: pause, resume, cancel"
        ) from None


def parse_event_name(name: "LifecycleEventName | str") -> LifecycleEventName:
    """Normalize a lifecycle event name (snake_case, camelCase or enum).

    Raises:
        ValueError: If the name is not a known lifecycle event
    """
    if isinstance(name, LifecycleEventName):
        return name
    if name in _EVENT_ALIASES:
        return _EVENT_ALIASES[name]
    try:
        return LifecycleEventName(name)
    except ValueError:
        raise ValueError(
            f"Unknown lifecycle event: {name!r}. Expected one of: on_pause, on_resume, on_cancel, on_error"
        ) from None


@dataclass(frozen=True, slots=True)
class PauseEvent:
    """The loop stopped at a checkpoint after a pause request."""

    step: int
    at: datetime = field(default_factory=_utcnow)

    name = LifecycleEventName.ON_PAUSE


@dataclass(frozen=True, slots=True)
class ResumeEvent:
    """The loop continued after a pause."""

    step: int
    at: datetime = field(default_factory=_utcnow)

    name = LifecycleEventName.ON_RESUME


@dataclass(frozen=True, slots=True)
class CancelEvent:
    """The loop terminated because of a cancel request."""

    step: int
    reason: str | None = None
    at: datetime = field(default_factory=_utcnow)

    name = LifecycleEventName.ON_CANCEL


@dataclass(frozen=True, slots=True)
class ErrorEvent:
    """The loop failed with an error."""

    step: int
    error: BaseException
    at: datetime = field(default_factory=_utcnow)

    name = LifecycleEventName.ON_ERROR


LifecycleEvent = PauseEvent | ResumeEvent | CancelEvent | ErrorEvent
