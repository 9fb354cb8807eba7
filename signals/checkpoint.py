"""Loop-side helper for honouring control signals between steps."""

import asyncio
import logging
from collections import deque

from errors import ExecutionCancelledError

from .bus import SignalBus
from .events import CancelEvent, ControlSignal, PauseEvent, ResumeEvent

logger = logging.getLogger(__name__)


class LoopControl:
    """Cooperative pause/resume/cancel handling for an agent loop.

    Subscribes to the bus as soon as it is created, so create it before the
    loop first awaits anything. Signals are queued as they arrive and acted on
    in arrival order at the next ``checkpoint()``.

    Usage::

        with LoopControl(request.signal_bus) as control:
            while not done:
                await control.checkpoint()
                control.advance()
                ...  # one step
    """

    __slots__ = ("_bus", "_cancel_reason", "_cancelled", "_paused", "_queue", "_unsubscribe", "_wake")

    def __init__(self, bus: SignalBus) -> None:
        self._bus = bus
        self._queue: deque[ControlSignal] = deque()
        self._wake = asyncio.Event()
        self._paused = False
        self._cancelled = False
        self._cancel_reason: str | None = None
        self._unsubscribe = bus.subscribe(self._on_signal)

    def __enter__(self) -> "LoopControl":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def step(self) -> int:
        return self._bus.step

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def advance(self) -> int:
        """Count one loop step."""
        return self._bus.advance_step()

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation from inside the loop, with an optional reason."""
        self._cancel_reason = reason
        self._on_signal(ControlSignal.CANCEL)

    def close(self) -> None:
        self._unsubscribe()

    def _on_signal(self, signal: ControlSignal) -> None:
        self._queue.append(signal)
        self._wake.set()

    async def checkpoint(self) -> None:
        """Act on pending signals; block while paused.

        Raises:
            ExecutionCancelledError: If cancel was requested, including while paused
        """
        if self._cancelled:
            raise ExecutionCancelledError(self.step, self._cancel_reason)

        while True:
            while self._queue:
                signal = self._queue.popleft()
                if signal is ControlSignal.CANCEL:
                    self._cancelled = True
                    self._paused = False
                    logger.info("Cancelled at step %d", self.step)
                    self._bus.emit(CancelEvent(step=self.step, reason=self._cancel_reason))
                    raise ExecutionCancelledError(self.step, self._cancel_reason)
                if signal is ControlSignal.PAUSE and not self._paused:
                    self._paused = True
                    logger.info("Paused at step %d", self.step)
                    self._bus.emit(PauseEvent(step=self.step))
                elif signal is ControlSignal.RESUME and self._paused:
                    self._paused = False
                    logger.info("Resumed at step %d", self.step)
                    self._bus.emit(ResumeEvent(step=self.step))

            if not self._paused:
                return

            self._wake.clear()
            await self._wake.wait()
