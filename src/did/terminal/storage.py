# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich.console import Console

from did import state
from did.repository import backup
from did.service.health import check_storage_health
from did.terminal.errors import exit_on_error
from did.view.views.storage import backups_report, health_report


def backups() -> None:
    """
    List the backups kept of the entries file, 1 being the most recent.
    """
    with exit_on_error():
        config = state.get_config()
        available_backups = backup.list_backups(state.get_entry_store())

    backups_report(available_backups, tz=config["timezone"])


def restore(
    number: Annotated[
        int,
        typer.Argument(
            help=f"Backup to restore, 1 (most recent) to {backup.MAX_BACKUP_COUNT}"
        ),
    ] = 1,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")
    ] = False,
) -> None:
    """
    Replace the entries file with one of its backups.

    The current file is backed up first, so a restore can itself be undone
    with 'did restore 1'.
    """
    console = Console()
    with exit_on_error():
        store = state.get_entry_store()
        if not yes and not typer.confirm(
            f"Replace {store.path} with backup {number}?"
        ):
            console.print("Cancelled")
            return
        backup.restore_backup(store, number)

    console.print(f"[green]Restored entries from backup {number}[/green]")


def validate() -> None:
    """
    Check the entries file for corrupted lines.
    """
    with exit_on_error():
        health = check_storage_health(state.get_entry_store())

    health_report(health)
