# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from did.model.timer import TimerState, TimerStatus
from did.time import datetime_to_display_local_time_str
from did.view.util import format_project, format_tags, render_elapsed
from did.view.views.header import header


def timer_state_text(state: TimerState) -> str:
    parts = [escape(state["description"])]
    if state["project"]:
        parts.append(f"[cyan]{format_project(state['project'])}[/cyan]")
    if state["tags"]:
        parts.append(f"[magenta]{format_tags(state['tags'])}[/magenta]")
    return " ".join(parts)


def timer_started_view(state: TimerState, tz: str = "local") -> None:
    console = Console()
    console.print(
        f"[green]Timer started[/green] at "
        f"{datetime_to_display_local_time_str(state['started_at'], tz)}: "
        f"{timer_state_text(state)}"
    )


def timer_replaced_view(previous_state: TimerState) -> None:
    console = Console()
    console.print(
        f"[yellow]Discarded running timer:[/yellow] {timer_state_text(previous_state)}"
    )


def timer_cancelled_view(state: TimerState) -> None:
    console = Console()
    console.print(f"[yellow]Timer cancelled:[/yellow] {timer_state_text(state)}")


def timer_status_view(status: TimerStatus, tz: str = "local") -> None:
    console = Console()
    state = status["state"]
    if not status["running"] or state is None:
        console.print("No timer running")
        return

    header("did", "timer")

    timer_table = Table(box=box.SIMPLE)
    timer_table.add_column("property")
    timer_table.add_column("value")
    timer_table.add_row("entry", timer_state_text(state))
    timer_table.add_row(
        "started", datetime_to_display_local_time_str(state["started_at"], tz)
    )
    timer_table.add_row("elapsed", render_elapsed(status["elapsed"]))
    console.print(timer_table)
