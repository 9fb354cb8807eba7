"""Unit tests for the loop-side checkpoint helper."""

import asyncio

import pytest

from errors import ExecutionCancelledError
from signals import CancelEvent, LoopControl, PauseEvent, ResumeEvent, SignalBus


def _record_all(bus: SignalBus) -> list:
    events = []
    for name in ("on_pause", "on_resume", "on_cancel", "on_error"):
        bus.on(name, events.append)
    return events


@pytest.mark.unit
async def test_checkpoint_without_signals_returns_immediately():
    bus = SignalBus()
    events = _record_all(bus)

    with LoopControl(bus) as control:
        await control.checkpoint()
        assert control.advance() == 1
        await control.checkpoint()

    assert events == []
    assert bus.step == 1


@pytest.mark.unit
async def test_subscribes_on_creation_and_unsubscribes_on_exit():
    bus = SignalBus()

    with LoopControl(bus):
        assert bus.listener_count() == 1

    assert bus.listener_count() == 0


@pytest.mark.unit
async def test_pause_blocks_until_resume():
    bus = SignalBus()
    events = _record_all(bus)
    control = LoopControl(bus)
    control.advance()

    bus.send("pause")
    task = asyncio.create_task(control.checkpoint())
    await asyncio.sleep(0.01)

    assert not task.done()
    assert control.paused

    bus.send("resume")
    await asyncio.wait_for(task, timeout=1)

    assert not control.paused
    assert [type(e) for e in events] == [PauseEvent, ResumeEvent]
    assert [e.step for e in events] == [1, 1]


@pytest.mark.unit
async def test_pause_and_resume_between_checkpoints_both_reported():
    """Signals arriving between two checkpoints are acted on in arrival order."""
    bus = SignalBus()
    events = _record_all(bus)
    control = LoopControl(bus)

    bus.send("pause")
    bus.send("resume")
    await asyncio.wait_for(control.checkpoint(), timeout=1)

    assert [type(e) for e in events] == [PauseEvent, ResumeEvent]


@pytest.mark.unit
async def test_cancel_raises_and_emits_event():
    bus = SignalBus()
    events = _record_all(bus)
    control = LoopControl(bus)
    control.advance()
    control.advance()

    bus.send("cancel")
    with pytest.raises(ExecutionCancelledError) as exc_info:
        await control.checkpoint()

    assert exc_info.value.step == 2
    assert control.cancelled
    assert len(events) == 1
    assert isinstance(events[0], CancelEvent)
    assert events[0].step == 2


@pytest.mark.unit
async def test_cancel_while_paused_terminates():
    bus = SignalBus()
    events = _record_all(bus)
    control = LoopControl(bus)

    bus.send("pause")
    task = asyncio.create_task(control.checkpoint())
    await asyncio.sleep(0.01)
    bus.send("cancel")

    with pytest.raises(ExecutionCancelledError):
        await asyncio.wait_for(task, timeout=1)
    assert [type(e) for e in events] == [PauseEvent, CancelEvent]


@pytest.mark.unit
async def test_internal_cancel_carries_reason():
    bus = SignalBus()
    events = _record_all(bus)
    control = LoopControl(bus)

    control.cancel("page crashed")
    with pytest.raises(ExecutionCancelledError, match="page crashed"):
        await control.checkpoint()

    assert events[0].reason == "page crashed"


@pytest.mark.unit
async def test_checkpoint_after_cancel_keeps_raising_without_new_event():
    bus = SignalBus()
    events = _record_all(bus)
    control = LoopControl(bus)

    bus.send("cancel")
    with pytest.raises(ExecutionCancelledError):
        await control.checkpoint()
    with pytest.raises(ExecutionCancelledError):
        await control.checkpoint()

    assert len(events) == 1


@pytest.mark.unit
async def test_redundant_signals_are_ignored():
    """Resume while running and a second pause while paused emit nothing."""
    bus = SignalBus()
    events = _record_all(bus)
    control = LoopControl(bus)

    bus.send("resume")
    await control.checkpoint()
    assert events == []

    bus.send("pause")
    bus.send("pause")
    task = asyncio.create_task(control.checkpoint())
    await asyncio.sleep(0.01)
    bus.send("resume")
    await asyncio.wait_for(task, timeout=1)

    assert [type(e) for e in events] == [PauseEvent, ResumeEvent]


@pytest.mark.unit
async def test_step_is_shared_with_bus():
    bus = SignalBus()
    control = LoopControl(bus)

    control.advance()
    control.advance()

    assert control.step == 2
    assert bus.step == 2
