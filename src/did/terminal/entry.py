# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from did import state
from did.model.entry import Entry
from did.query.filter import create_filter
from did.service import entry as entry_service
from did.service import soft_delete
from did.terminal.errors import exit_on_error
from did.terminal.options import (
    FromOption,
    LastDaysOption,
    LastMonthOption,
    LastWeekOption,
    MonthOption,
    ProjectOption,
    TagOption,
    ToOption,
    WeekOption,
    YesterdayOption,
)
from did.terminal.parse import resolve_range_options
from did.view.util import format_duration, format_entry_text
from did.view.views import entry as entry_view


def add(
    text: Annotated[
        list[str],
        typer.Argument(help="'<description> [@project] [#tag...] for <duration>'"),
    ],
) -> None:
    """
    Log work, e.g. did add fix login bug @acme #bugfix for 1h30m
    """
    with exit_on_error():
        entry = entry_service.create_entry(state.get_entry_store(), " ".join(text))

    console = Console()
    console.print(
        f"[green]Logged[/green] {format_duration(entry['duration_minutes'])}: "
        f"{format_entry_text(entry)}",
        highlight=False,
    )


def list_(
    yesterday: YesterdayOption = False,
    week: WeekOption = False,
    last_week: LastWeekOption = False,
    month: MonthOption = False,
    last_month: LastMonthOption = False,
    last: LastDaysOption = None,
    from_date: FromOption = None,
    to_date: ToOption = None,
    project: ProjectOption = None,
    tags: TagOption = None,
) -> None:
    """
    List entries, today's by default.
    """
    with exit_on_error():
        config = state.get_config()
        store = state.get_entry_store()
        date_range = resolve_range_options(
            store.clock(),
            config["week_start_day"],
            config["timezone"],
            yesterday=yesterday,
            week=week,
            last_week=last_week,
            month=month,
            last_month=last_month,
            last=last,
            from_date=from_date,
            to_date=to_date,
        )
        listing = entry_service.list_entries(
            store,
            date_range,
            create_filter(project=project, tags=tags),
        )

    entry_view.entries_report(listing, tz=config["timezone"])


def edit(
    index: Annotated[int, typer.Argument(help="Entry number as shown by 'did list'")],
    description: Annotated[
        Optional[str],
        typer.Option(
            "--description",
            "-d",
            help="New description; its @project and #tags replace the old ones",
        ),
    ] = None,
    duration: Annotated[
        Optional[str],
        typer.Option("--duration", "-t", help="valid inputs: 2h, 30m, 1h30m"),
    ] = None,
) -> None:
    """
    Change the description and/or duration of an entry.
    """
    with exit_on_error():
        config = state.get_config()
        entry = entry_service.edit_entry(
            state.get_entry_store(), index, description=description, duration=duration
        )

    entry_view.single_entry_report(
        entry, title=f"Updated entry {index}", tz=config["timezone"]
    )


def delete(
    index: Annotated[int, typer.Argument(help="Entry number as shown by 'did list'")],
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")
    ] = False,
) -> None:
    """
    Delete an entry. It can be brought back with 'did undo'.
    """
    console = Console()
    with exit_on_error():
        config = state.get_config()

    def confirm(entry: Entry) -> bool:
        if yes:
            return True
        entry_view.single_entry_report(
            entry, title=f"Entry {index}", tz=config["timezone"]
        )
        return typer.confirm("Delete this entry?")

    with exit_on_error():
        entry = soft_delete.delete_entry(
            state.get_entry_store(),
            index,
            confirm=confirm,
            retention_days=config["deleted_retention_days"],
        )

    if entry is None:
        console.print("Cancelled")
        return
    console.print(
        f"[green]Deleted[/green] {escape(entry['description'])} "
        "(use 'did undo' to restore)",
        highlight=False,
    )


def undo() -> None:
    """
    Restore the most recently deleted entry.
    """
    with exit_on_error():
        config = state.get_config()
        entry = soft_delete.restore_entry(state.get_entry_store())

    entry_view.single_entry_report(entry, title="Restored entry", tz=config["timezone"])


def purge(
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")
    ] = False,
) -> None:
    """
    Permanently remove every deleted entry.
    """
    console = Console()
    with exit_on_error():
        store = state.get_entry_store()
        deleted_count = soft_delete.count_deleted(store)
        if deleted_count == 0:
            console.print("No deleted entries to purge")
            return
        if not yes and not typer.confirm(
            f"Permanently remove {deleted_count} deleted entries?"
        ):
            console.print("Cancelled")
            return
        purged_count = soft_delete.purge_deleted(store)

    console.print(f"[green]Purged {purged_count} deleted entries[/green]")
