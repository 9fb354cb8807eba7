"""Control signals and lifecycle events shared by the agent and its loop."""

from .bus import SignalBus
from .checkpoint import LoopControl
from .events import (
    CancelEvent,
    ControlSignal,
    ErrorEvent,
    LifecycleEvent,
    LifecycleEventName,
    PauseEvent,
    ResumeEvent,
)

__all__ = [
    "CancelEvent",
    "ControlSignal",
    "ErrorEvent",
    "LifecycleEvent",
    "LifecycleEventName",
    "LoopControl",
    "PauseEvent",
    "ResumeEvent",
    "SignalBus",
]
