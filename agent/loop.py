"""Contract between the agent and the external computer-use loop."""

import importlib
import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from playwright.async_api import Page

from signals import SignalBus

from .config import ExecutionConfig


@dataclass(frozen=True, slots=True)
class LoopRequest:
    """Everything the loop receives for one execution."""

    query: str
    api_key: str
    page: Page
    model: str
    signal_bus: SignalBus
    thinking_budget: int
    system_prompt_suffix: str | None = None
    execution_config: ExecutionConfig | None = None


class AgentLoop(Protocol):
    """Runs the model/action loop until the task is done.

    Implementations must create a ``signals.LoopControl`` on
    ``request.signal_bus`` before their first await, call its ``checkpoint()``
    between steps and ``advance()`` once per step. They return the
    conversation, last message being the final answer.
    """

    async def __call__(self, request: LoopRequest) -> Sequence[Any]: ...


def load_loop(spec: str) -> AgentLoop:
    """Resolve a loop given as ``'package.module:attribute'``.

    Raises:
        ValueError: If the spec is malformed, cannot be imported or is not callable
    """
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(
            f"Invalid loop spec: '{spec}'. Expected format: 'package.module:function' "
            f"(e.g. 'my_loops.anthropic:computer_use_loop')"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import loop module '{module_name}': {e}") from e

    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise ValueError(f"Module '{module_name}' has no attribute '{attr}'") from None

    if not callable(target):
        raise ValueError(f"Loop '{spec}' is not callable")
    return target


def load_loop_from_env(env_var_name: str = "AGENT_LOOP") -> AgentLoop:
    """Load the loop named by an environment variable.

    Raises:
        ValueError: If the variable is unset or names an invalid loop
    """
    spec = os.environ.get(env_var_name)
    if not spec:
        raise ValueError(
            f"No agent loop configured: pass loop=... or set {env_var_name}='package.module:function'"
        )
    return load_loop(spec)
