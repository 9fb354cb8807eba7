"""CLI entry point for the computer-use agent."""

import argparse
import asyncio
import json
import logging
import signal
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from rich.logging import RichHandler

import console as console_output
from agent import AgentSettings, ComputerUseAgent, load_loop
from browser.controller import BrowserController, ViewportSize
from errors import AgentError, ExecutionCancelledError

logger = logging.getLogger(__name__)

_RUNS_DIR = Path("runs")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a browser task with a computer-use agent")
    parser.add_argument("url", help="Starting URL to navigate to")
    parser.add_argument("task", help="Task for the agent to accomplish")
    parser.add_argument(
        "--schema",
        type=Path,
        default=None,
        help="JSON Schema file; the answer is parsed and validated against it",
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Model identifier (default: AGENT_MODEL or claude-sonnet-4-20250514)",
    )
    parser.add_argument(
        "--loop",
        default=None,
        help="Agent loop as 'package.module:function' (default: AGENT_LOOP)",
    )
    parser.add_argument("--system-prompt-suffix", default=None, help="Extra instructions for the system prompt")
    parser.add_argument("--thinking-budget", type=int, default=None, help="Reasoning token budget (default: 1024)")
    parser.add_argument(
        "--no-headless",
        action="store_true",
        help="Run browser in visible (non-headless) mode",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Also print DEBUG logs to the terminal",
    )
    return parser.parse_args()


def _load_schema(path: Path) -> dict[str, Any]:
    schema = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(schema, dict):
        raise ValueError(f"Schema in {path} must be a JSON object")
    return schema


def _setup_logging(run_dir: Path, verbose: bool) -> None:
    log_format = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"
    log_datefmt = "%H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(run_dir / "log.txt", mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(log_format, datefmt=log_datefmt))
    root_logger.addHandler(file_handler)

    if verbose:
        rich_handler = RichHandler(console=console_output.console, show_path=False)
        rich_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(rich_handler)


def _install_signal_handlers(agent: ComputerUseAgent) -> None:
    """Ctrl+C cancels the run (twice aborts); SIGUSR1/SIGUSR2 pause and resume."""
    loop = asyncio.get_running_loop()

    def on_interrupt() -> None:
        console_output.info("Cancelling... press Ctrl+C again to abort")
        loop.remove_signal_handler(signal.SIGINT)
        agent.controller.signal("cancel")

    loop.add_signal_handler(signal.SIGINT, on_interrupt)
    if hasattr(signal, "SIGUSR1"):
        loop.add_signal_handler(signal.SIGUSR1, agent.controller.signal, "pause")
        loop.add_signal_handler(signal.SIGUSR2, agent.controller.signal, "resume")


async def _run(args: argparse.Namespace, settings: AgentSettings, schema: dict[str, Any] | None) -> int:
    loop_spec = args.loop or settings.loop_spec
    if not loop_spec:
        console_output.result_fail("No agent loop configured: pass --loop or set AGENT_LOOP", 0)
        return 1
    agent_loop = load_loop(loop_spec)

    async with BrowserController(
        viewport=ViewportSize(), headless=not args.no_headless, start_url=args.url
    ) as browser:
        agent = ComputerUseAgent(
            api_key=settings.api_key,
            page=browser.page,
            model=args.model or settings.model,
            loop=agent_loop,
        )
        agent.controller.on("on_pause", console_output.paused)
        agent.controller.on("on_resume", console_output.resumed)
        agent.controller.on("on_cancel", console_output.cancelled)
        agent.controller.on("on_error", console_output.errored)
        _install_signal_handlers(agent)

        try:
            result = await agent.execute(
                args.task,
                schema,
                system_prompt_suffix=args.system_prompt_suffix,
                thinking_budget=args.thinking_budget,
            )
        except ExecutionCancelledError as e:
            console_output.result_fail(str(e), e.step)
            return 130
        except AgentError as e:
            logger.error("Execution failed: %s", e)
            console_output.result_fail(str(e), agent.steps_taken)
            return 1

        console_output.result_success(result, agent.steps_taken)
        return 0


def main() -> None:
    load_dotenv()

    args = _parse_args()

    try:
        settings = AgentSettings.from_env()
        schema = _load_schema(args.schema) if args.schema else None
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    run_dir = _RUNS_DIR / datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    run_dir.mkdir(parents=True, exist_ok=True)
    _setup_logging(run_dir, args.verbose)

    console_output.console.print(f"[bold]Task:[/bold] {args.task}")
    console_output.console.print(f"[bold]URL:[/bold] {args.url}")
    console_output.console.print(f"[bold]Model:[/bold] {args.model or settings.model}")
    console_output.console.print(f"[bold]Log:[/bold] {run_dir / 'log.txt'}")

    try:
        exit_code = asyncio.run(_run(args, settings, schema))
    except KeyboardInterrupt:
        console_output.console.print("\n[yellow]Aborted by user (Ctrl+C)[/yellow]")
        sys.exit(130)  # Standard exit code for Ctrl+C
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
