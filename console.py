"""Rich console output for agent lifecycle events and results."""

import json
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel

from signals import CancelEvent, ErrorEvent, PauseEvent, ResumeEvent

console = Console()


def _timestamp(event: PauseEvent | ResumeEvent | CancelEvent | ErrorEvent) -> str:
    return event.at.astimezone().strftime("%H:%M:%S")


def paused(event: PauseEvent) -> None:
    console.print(f"[bold yellow]⏸ Paused[/bold yellow] [dim]at step {event.step} ({_timestamp(event)})[/dim]")


def resumed(event: ResumeEvent) -> None:
    console.print(f"[bold green]▶ Resumed[/bold green] [dim]at step {event.step} ({_timestamp(event)})[/dim]")


def cancelled(event: CancelEvent) -> None:
    reason = f": {event.reason}" if event.reason else ""
    console.print(f"[bold red]■ Cancelled{reason}[/bold red] [dim]at step {event.step} ({_timestamp(event)})[/dim]")


def errored(event: ErrorEvent) -> None:
    console.print(f"[bold red]✖ Error at step {event.step}:[/bold red] {event.error}")


def info(message: str) -> None:
    console.print(f"[dim]{message}[/dim]")


def _format_result(result: Any) -> str:
    if isinstance(result, BaseModel):
        return result.model_dump_json(indent=2)
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2, ensure_ascii=False)


def result_success(result: Any, steps: int) -> None:
    console.print(Panel(f"{_format_result(result)}\n[dim]{steps} steps[/dim]", title="Done", border_style="green"))


def result_fail(summary: str, steps: int) -> None:
    console.print(Panel(f"{summary}\n[dim]{steps} steps[/dim]", title="Failed", border_style="red"))
