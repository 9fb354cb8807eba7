"""Caller-facing handle for steering a running agent."""

from collections.abc import Callable
from typing import Any, Literal, overload

from signals import (
    CancelEvent,
    ControlSignal,
    ErrorEvent,
    LifecycleEventName,
    PauseEvent,
    ResumeEvent,
    SignalBus,
)

SignalKind = Literal["pause", "resume", "cancel"] | ControlSignal
Unsubscribe = Callable[[], None]


class AgentController:
    """Sends control signals and subscribes to lifecycle events.

    A thin pass-through over the agent's SignalBus. Signals sent while no
    execution runs are harmless.
    """

    __slots__ = ("_bus",)

    def __init__(self, bus: SignalBus) -> None:
        self._bus = bus

    def signal(self, signal: SignalKind) -> None:
        """Send ``pause``, ``resume`` or ``cancel`` to the running loop."""
        self._bus.send(signal)

    @overload
    def on(
        self,
        event: Literal["on_pause", "onPause", LifecycleEventName.ON_PAUSE],
        callback: Callable[[PauseEvent], None],
    ) -> Unsubscribe: ...

    @overload
    def on(
        self,
        event: Literal["on_resume", "onResume", LifecycleEventName.ON_RESUME],
        callback: Callable[[ResumeEvent], None],
    ) -> Unsubscribe: ...

    @overload
    def on(
        self,
        event: Literal["on_cancel", "onCancel", LifecycleEventName.ON_CANCEL],
        callback: Callable[[CancelEvent], None],
    ) -> Unsubscribe: ...

    @overload
    def on(
        self,
        event: Literal["on_error", "onError", LifecycleEventName.ON_ERROR],
        callback: Callable[[ErrorEvent], None],
    ) -> Unsubscribe: ...

    def on(self, event: LifecycleEventName | str, callback: Callable[[Any], None]) -> Unsubscribe:
        """Subscribe to a lifecycle event; returns a function that unsubscribes."""
        return self._bus.on(event, callback)
