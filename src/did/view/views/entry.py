# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from did.model.entry import Entry, IndexedEntry
from did.model.listing import EntryListing, SearchResult
from did.model.storage import ParseWarning
from did.service.health import format_warning
from did.time import datetime_to_display_local_datetime_str
from did.view.util import (
    format_duration,
    format_entry_text,
    format_project,
    format_tags,
)
from did.view.views.header import header


def __entries_table(
    indexed_entries: list[IndexedEntry], total_minutes: int, tz: str
) -> Table:
    entries_table = Table(box=box.SIMPLE)
    entries_table.add_column("#", justify="right")
    entries_table.add_column("when")
    entries_table.add_column("duration", justify="right")
    entries_table.add_column("entry")

    for indexed_entry in indexed_entries:
        entry = indexed_entry["entry"]
        entries_table.add_row(
            str(indexed_entry["active_index"]),
            datetime_to_display_local_datetime_str(entry["timestamp"], tz),
            format_duration(entry["duration_minutes"]),
            format_entry_text(entry),
        )

    entries_table.add_section()
    entries_table.add_row(
        "", "[bold]total[/bold]", f"[bold]{format_duration(total_minutes)}[/bold]", ""
    )
    return entries_table


def warnings_view(warnings: list[ParseWarning]) -> None:
    if len(warnings) == 0:
        return
    console = Console(stderr=True)
    console.print(
        f"[yellow]Warning: skipped {len(warnings)} corrupted line(s)[/yellow]",
        highlight=False,
    )
    for warning in warnings:
        console.print(
            f"[yellow]  {escape(format_warning(warning))}[/yellow]", highlight=False
        )


def entries_report(listing: EntryListing, tz: str = "local") -> None:
    warnings_view(listing["warnings"])

    date_range = listing["date_range"]
    period = date_range["period"] if date_range is not None else "all time"
    console = Console()
    if len(listing["entries"]) == 0:
        console.print(f"No entries found for {period}")
        return

    header("did", f"Entries for {period}")
    console.print(__entries_table(listing["entries"], listing["total_minutes"], tz))


def search_results_report(result: SearchResult, tz: str = "local") -> None:
    warnings_view(result["warnings"])

    console = Console()
    if len(result["entries"]) == 0:
        console.print(f"No entries matching '{escape(result['query'])}'")
        return

    sub_header = f"{len(result['entries'])} match(es) for '{escape(result['query'])}'"
    if result["date_range"] is not None:
        sub_header += f" ({result['date_range']['period']})"
    header("did", sub_header)
    console.print(__entries_table(result["entries"], result["total_minutes"], tz))


def single_entry_report(
    entry: Entry, title: Optional[str] = None, tz: str = "local"
) -> None:
    if title is not None:
        header("did", title)

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("description", escape(entry["description"]))
    entry_table.add_row("duration", format_duration(entry["duration_minutes"]))
    entry_table.add_row("project", format_project(entry["project"]))
    entry_table.add_row("tags", format_tags(entry["tags"]))
    entry_table.add_row(
        "timestamp", datetime_to_display_local_datetime_str(entry["timestamp"], tz)
    )
    if entry["deleted_at"] is not None:
        entry_table.add_row(
            "deleted", datetime_to_display_local_datetime_str(entry["deleted_at"], tz)
        )

    console = Console()
    console.print(entry_table)
