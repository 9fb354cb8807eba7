"""In-process channel carrying control signals and lifecycle events.

Two independent registries live on one bus:

* control signals (caller -> loop): ``send()`` / ``subscribe()``
* lifecycle events (loop -> caller): ``emit()`` / ``on()``

Delivery is synchronous, in registration order. The bus also carries the step
counter of the current execution so that events emitted from outside the loop
(e.g. an error reported by the agent) use the same counter.
"""

import logging
from collections.abc import Callable
from typing import Any

from .events import (
    ControlSignal,
    LifecycleEvent,
    LifecycleEventName,
    parse_event_name,
    parse_signal,
)

logger = logging.getLogger(__name__)

ControlCallback = Callable[[ControlSignal], None]
EventCallback = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class _Registration:
    """One listener entry; compared by identity so duplicates stay distinct."""

    __slots__ = ("callback",)

    def __init__(self, callback: Callable[[Any], None]) -> None:
        self.callback = callback


def _make_unsubscribe(registry: list[_Registration], entry: _Registration) -> Unsubscribe:
    def unsubscribe() -> None:
        for i, existing in enumerate(registry):
            if existing is entry:
                del registry[i]
                return

    return unsubscribe


class SignalBus:
    """Publish/subscribe channel shared by an agent and its loop."""

    __slots__ = ("_armed", "_control", "_events", "_pending_cancel", "_pending_state", "_step")

    def __init__(self) -> None:
        self._control: list[_Registration] = []
        self._events: dict[LifecycleEventName, list[_Registration]] = {name: [] for name in LifecycleEventName}
        self._pending_state: ControlSignal | None = None
        self._pending_cancel = False
        self._armed = False
        self._step = 0

    # -- step counter ---------------------------------------------------------

    @property
    def step(self) -> int:
        """Step counter of the current execution."""
        return self._step

    def advance_step(self) -> int:
        self._step += 1
        return self._step

    def reset(self) -> None:
        """Start a new execution: zero the step counter and drop a stale cancel.

        A buffered pause and registered listeners are kept.
        """
        self._step = 0
        self._pending_cancel = False

    # -- execution window -------------------------------------------------------

    @property
    def armed(self) -> bool:
        """True while an execution is in flight."""
        return self._armed

    def arm(self) -> None:
        self._armed = True

    def disarm(self) -> None:
        self._armed = False
        self._pending_cancel = False

    # -- control signals (caller -> loop) ----------------------------------------

    def send(self, signal: ControlSignal | str) -> None:
        """Dispatch a control signal to every loop-side subscriber.

        A failing subscriber is logged and skipped; the caller never sees it.

        With no subscriber attached, pause/resume are remembered as the latest
        requested state and cancel is remembered only while an execution is
        armed. Both are replayed to the next subscriber.

        Raises:
            ValueError: If the signal name is unknown
        """
        signal = parse_signal(signal)

        if not self._control:
            if signal is ControlSignal.CANCEL:
                if self._armed:
                    self._pending_cancel = True
                    logger.debug("Buffered cancel until the loop subscribes")
                else:
                    logger.debug("Dropped cancel: no execution in flight")
            else:
                self._pending_state = signal
                logger.debug("Buffered %s until the loop subscribes", signal.value)
            return

        logger.debug("Sending control signal: %s", signal.value)
        for entry in list(self._control):
            self._deliver(entry.callback, signal)

    def subscribe(self, callback: ControlCallback) -> Unsubscribe:
        """Register a loop-side control-signal handler.

        Signals buffered while nobody listened are replayed to it immediately.

        Returns:
            Function removing exactly this registration
        """
        entry = _Registration(callback)
        self._control.append(entry)

        pending: list[ControlSignal] = []
        if self._pending_state is ControlSignal.PAUSE:
            pending.append(ControlSignal.PAUSE)
        if self._pending_cancel:
            pending.append(ControlSignal.CANCEL)
        self._pending_state = None
        self._pending_cancel = False
        for signal in pending:
            logger.debug("Replaying buffered %s", signal.value)
            self._deliver(callback, signal)

        return _make_unsubscribe(self._control, entry)

    @staticmethod
    def _deliver(callback: ControlCallback, signal: ControlSignal) -> None:
        try:
            callback(signal)
        except Exception:
            logger.exception("Control subscriber raised on %s", signal.value)

    # -- lifecycle events (loop -> caller) -----------------------------------------

    def on(self, event: LifecycleEventName | str, callback: EventCallback) -> Unsubscribe:
        """Register a listener for one lifecycle-event family.

        Returns:
            Function removing exactly this registration

        Raises:
            ValueError: If the event name is unknown
        """
        registry = self._events[parse_event_name(event)]
        entry = _Registration(callback)
        registry.append(entry)
        return _make_unsubscribe(registry, entry)

    def emit(self, event: LifecycleEvent) -> None:
        """Deliver a lifecycle event to its family's listeners.

        A failing listener is logged and skipped; it never reaches the loop.
        """
        logger.debug("Emitting %s at step %d", event.name.value, event.step)
        for entry in list(self._events[event.name]):
            try:
                entry.callback(event)
            except Exception:
                logger.exception("Listener for %s raised", event.name.value)

    def listener_count(self, event: LifecycleEventName | str | None = None) -> int:
        """Number of lifecycle listeners for ``event``, or control subscribers when None."""
        if event is None:
            return len(self._control)
        return len(self._events[parse_event_name(event)])
