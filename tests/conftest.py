"""Pytest fixtures: scripted stand-ins for the external agent loop."""

import asyncio
from collections.abc import Sequence
from typing import Any

import pytest

from agent import ComputerUseAgent, ConversationMessage, LoopRequest, MessageRole
from signals import LoopControl


def assistant(content: Any) -> ConversationMessage:
    return ConversationMessage(role=MessageRole.ASSISTANT, content=content)


class ScriptedLoop:
    """Loop stand-in that runs a fixed number of steps and returns canned messages.

    Each step passes a checkpoint, then blocks on ``gate`` (open by default) so
    tests can hold the loop inside a step while they send signals.
    """

    def __init__(
        self,
        messages: Sequence[Any] = (),
        steps: int = 1,
        error: Exception | None = None,
        fail_at_step: int | None = None,
    ) -> None:
        self.messages = list(messages)
        self.steps = steps
        self.error = error
        self.fail_at_step = fail_at_step
        self.requests: list[LoopRequest] = []
        self.steps_completed = 0
        self.gate = asyncio.Event()
        self.gate.set()
        self.step_reached = asyncio.Event()

    async def __call__(self, request: LoopRequest) -> list[Any]:
        self.requests.append(request)
        self.steps_completed = 0
        with LoopControl(request.signal_bus) as control:
            for _ in range(self.steps):
                await control.checkpoint()
                step = control.advance()
                if self.error is not None and step == self.fail_at_step:
                    raise self.error
                self.step_reached.set()
                await self.gate.wait()
                self.steps_completed += 1
            await control.checkpoint()
        return self.messages


@pytest.fixture
def page():
    """Opaque page handle; the agent only passes it through."""
    return object()


@pytest.fixture
def make_agent(page):
    """Build an agent around a loop."""

    def factory(loop, **kwargs) -> ComputerUseAgent:
        return ComputerUseAgent(api_key="test-key", page=page, loop=loop, **kwargs)

    return factory
