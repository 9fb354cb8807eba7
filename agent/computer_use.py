"""Computer-use agent: runs a browser task and interprets the final answer."""

import logging
from typing import Any, TypeVar, overload

from playwright.async_api import Page
from pydantic import BaseModel

from errors import ExecutionCancelledError, ExecutionInProgressError, LoopError, NoResponseError
from signals import ErrorEvent, SignalBus

from .config import DEFAULT_MODEL, DEFAULT_THINKING_BUDGET, ExecutionConfig
from .controller import AgentController
from .extraction import extract_json
from .loop import AgentLoop, LoopRequest, load_loop_from_env
from .messages import extract_text
from .prompts import build_structured_query
from .schema import JsonSchemaType, validate

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ComputerUseAgent:
    """Drives a computer-use loop against a Playwright page.

    The signal bus and ``controller`` exist from construction on and are reused
    by every ``execute()`` call, so listeners can be attached and ``pause`` sent
    before the first run starts.

    Example::

        agent = ComputerUseAgent(api_key=key, page=page, loop=my_loop)
        title = await agent.execute("Tell me the page title")
        user = await agent.execute("Get user info", UserInfo)
    """

    __slots__ = ("_api_key", "_bus", "_controller", "_execution_config", "_loop", "_model", "_page", "_running")

    def __init__(
        self,
        api_key: str,
        page: Page,
        model: str = DEFAULT_MODEL,
        execution_config: ExecutionConfig | None = None,
        loop: AgentLoop | None = None,
    ) -> None:
        """
        Args:
            api_key: Model provider API key, handed to the loop
            page: Playwright page the loop controls
            model: Model identifier, handed to the loop
            execution_config: Default execution behaviour for every run
            loop: Loop implementation; read from AGENT_LOOP when omitted
        """
        self._api_key = api_key
        self._page = page
        self._model = model
        self._execution_config = execution_config
        self._loop = loop if loop is not None else load_loop_from_env()
        self._running = False

        self._bus = SignalBus()
        self._controller = AgentController(self._bus)

    @property
    def controller(self) -> AgentController:
        """Control-flow signals and lifecycle events."""
        return self._controller

    @property
    def model(self) -> str:
        return self._model

    @property
    def running(self) -> bool:
        return self._running

    @property
    def steps_taken(self) -> int:
        """Steps counted by the current or most recent execution."""
        return self._bus.step

    @overload
    async def execute(
        self,
        query: str,
        schema: None = None,
        *,
        system_prompt_suffix: str | None = None,
        thinking_budget: int | None = None,
        execution_config: ExecutionConfig | None = None,
    ) -> str: ...

    @overload
    async def execute(
        self,
        query: str,
        schema: type[M],
        *,
        system_prompt_suffix: str | None = None,
        thinking_budget: int | None = None,
        execution_config: ExecutionConfig | None = None,
    ) -> M: ...

    @overload
    async def execute(
        self,
        query: str,
        schema: dict[str, Any],
        *,
        system_prompt_suffix: str | None = None,
        thinking_budget: int | None = None,
        execution_config: ExecutionConfig | None = None,
    ) -> Any: ...

    async def execute(
        self,
        query: str,
        schema: JsonSchemaType | None = None,
        *,
        system_prompt_suffix: str | None = None,
        thinking_budget: int | None = None,
        execution_config: ExecutionConfig | None = None,
    ) -> Any:
        """Run a task and return the final answer.

        Args:
            query: Task description
            schema: Pydantic model class or JSON schema dict for a structured answer
            system_prompt_suffix: Extra instructions appended to the loop's system prompt
            thinking_budget: Token budget for the model's reasoning (default: 1024)
            execution_config: Overrides the agent's execution config for this run

        Returns:
            The final text when no schema is given, otherwise the validated value
            (a model instance for Pydantic schemas, parsed JSON for dict schemas)

        Raises:
            ExecutionInProgressError: If another execution is running on this agent
            ExecutionCancelledError: If the run was cancelled
            LoopError: If the loop failed
            NoResponseError: If the loop produced no messages
            MalformedResponseError: If no JSON could be parsed from the answer
            SchemaValidationError: If the parsed answer does not match the schema
        """
        if self._running:
            raise ExecutionInProgressError()

        final_query = build_structured_query(query, schema) if schema is not None else query

        request = LoopRequest(
            query=final_query,
            api_key=self._api_key,
            page=self._page,
            model=self._model,
            signal_bus=self._bus,
            thinking_budget=thinking_budget if thinking_budget is not None else DEFAULT_THINKING_BUDGET,
            system_prompt_suffix=system_prompt_suffix,
            execution_config=execution_config if execution_config is not None else self._execution_config,
        )

        self._running = True
        self._bus.reset()
        self._bus.arm()
        logger.info("Executing task with %s (structured=%s)", self._model, schema is not None)
        try:
            messages = await self._loop(request)
        except ExecutionCancelledError:
            logger.warning("Execution cancelled at step %d", self._bus.step)
            raise
        except Exception as e:
            logger.error("Agent loop failed at step %d: %s", self._bus.step, e)
            self._bus.emit(ErrorEvent(step=self._bus.step, error=e))
            raise LoopError(f"Agent loop failed: {e}") from e
        finally:
            self._bus.disarm()
            self._running = False

        if not messages:
            raise NoResponseError()

        response = extract_text(messages[-1])
        logger.info("Execution finished after %d steps", self._bus.step)

        if schema is None:
            return response

        return validate(extract_json(response), schema)
