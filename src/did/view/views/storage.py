# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from did.model.storage import BackupInfo, StorageHealth
from did.time import datetime_to_display_local_datetime_str
from did.view.views.header import header


def backups_report(backups: list[BackupInfo], tz: str = "local") -> None:
    console = Console()
    if len(backups) == 0:
        console.print("No backups available")
        return

    header("did", "backups")

    backups_table = Table(box=box.SIMPLE)
    backups_table.add_column("#", justify="right")
    backups_table.add_column("modified")
    backups_table.add_column("size", justify="right")
    backups_table.add_column("path")
    for backup in backups:
        stat = backup["path"].stat()
        modified = pendulum.from_timestamp(stat.st_mtime)
        backups_table.add_row(
            str(backup["number"]),
            datetime_to_display_local_datetime_str(modified, tz),
            f"{stat.st_size} B",
            escape(str(backup["path"])),
        )
    console.print(backups_table)


def health_report(health: StorageHealth) -> None:
    console = Console()
    header("did", "storage health")

    health_table = Table(box=box.SIMPLE, show_header=False)
    health_table.add_column("property")
    health_table.add_column("value", justify="right")
    health_table.add_row("total lines", str(health["total_lines"]))
    health_table.add_row("valid entries", str(health["valid_entries"]))
    health_table.add_row("corrupted lines", str(health["corrupted_entries"]))
    console.print(health_table)

    if health["corrupted_entries"] == 0:
        console.print("[green]Storage is healthy[/green]")
        return

    warnings_table = Table(box=box.SIMPLE)
    warnings_table.add_column("line", justify="right")
    warnings_table.add_column("error")
    warnings_table.add_column("content")
    for warning in health["warnings"]:
        warnings_table.add_row(
            str(warning["line_number"]),
            escape(warning["error"]),
            escape(warning["content"]),
        )
    console.print(warnings_table)
    console.print(
        f"[yellow]{health['corrupted_entries']} corrupted line(s) are skipped when "
        "reading and kept unchanged on disk[/yellow]"
    )
