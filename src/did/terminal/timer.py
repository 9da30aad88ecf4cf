# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich.console import Console

from did import state
from did.errors import TimerAlreadyRunningError
from did.service import timer as timer_service
from did.terminal.errors import exit_on_error
from did.view.util import format_duration, format_entry_text, render_elapsed
from did.view.views import timer as timer_view


def start(
    text: Annotated[
        list[str], typer.Argument(help="'<description> [@project] [#tag...]'")
    ],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Replace a timer that is already running"),
    ] = False,
) -> None:
    """
    Start the timer. 'did stop' turns it into an entry.
    """
    with exit_on_error():
        config = state.get_config()
        timer_store = state.get_timer_store()
        try:
            new_state, previous_state = timer_service.start_timer(
                timer_store, " ".join(text), force=force
            )
        except TimerAlreadyRunningError as e:
            status = timer_service.get_timer_status(timer_store)
            Console(stderr=True).print(
                f"Running: {timer_view.timer_state_text(e.existing)} "
                f"({render_elapsed(status['elapsed'])})",
                highlight=False,
            )
            raise

    if previous_state is not None:
        timer_view.timer_replaced_view(previous_state)
    timer_view.timer_started_view(new_state, tz=config["timezone"])


def stop() -> None:
    """
    Stop the timer and log the elapsed time as an entry.
    """
    with exit_on_error():
        entry, _ = timer_service.stop_timer(
            state.get_timer_store(), state.get_entry_store()
        )

    console = Console()
    console.print(
        f"[green]Logged[/green] {format_duration(entry['duration_minutes'])}: "
        f"{format_entry_text(entry)}",
        highlight=False,
    )


def cancel() -> None:
    """
    Discard the running timer without logging anything.
    """
    with exit_on_error():
        cancelled_state = timer_service.cancel_timer(state.get_timer_store())

    timer_view.timer_cancelled_view(cancelled_state)


def status() -> None:
    """
    Show the running timer, if any.
    """
    with exit_on_error():
        config = state.get_config()
        timer_status = timer_service.get_timer_status(state.get_timer_store())

    timer_view.timer_status_view(timer_status, tz=config["timezone"])
