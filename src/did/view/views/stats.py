# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from did.model.stats import GroupTotal, Statistics
from did.view.util import format_duration
from did.view.views.header import header


def __group_table(title: str, groups: list[GroupTotal]) -> Table:
    group_table = Table(title=title, box=box.SIMPLE, title_justify="left")
    group_table.add_column("name")
    group_table.add_column("time", justify="right")
    group_table.add_column("entries", justify="right")
    for group in groups:
        group_table.add_row(
            group["name"], format_duration(group["minutes"]), str(group["entry_count"])
        )
    return group_table


def stats_report(statistics: Statistics) -> None:
    console = Console()
    period = statistics["date_range"]["period"]
    if statistics["entry_count"] == 0:
        console.print(f"No entries found for {period}")
        return

    header("did", f"Statistics for {period}")

    summary_table = Table(box=box.SIMPLE, show_header=False)
    summary_table.add_column("property")
    summary_table.add_column("value", justify="right")
    summary_table.add_row("total", format_duration(statistics["total_minutes"]))
    summary_table.add_row("entries", str(statistics["entry_count"]))
    summary_table.add_row("days tracked", str(statistics["days_tracked"]))
    summary_table.add_row(
        "average per day",
        format_duration(round(statistics["average_minutes_per_day"])),
    )
    console.print(summary_table)

    console.print(__group_table("Projects", statistics["projects"]))
    console.print(__group_table("Tags", statistics["tags"]))
