# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer

from did import state
from did.log_setup import configure_logging
from did.terminal import configuration, entry, export, search, stats, storage, timer
from did.terminal.custom_typer import OrderedTyperGroup

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="did - log what you did, and for how long",
    no_args_is_help=True,
)
app.command(name="add, a")(entry.add)
app.command(name="list, ls")(entry.list_)
app.command(name="edit, e", no_args_is_help=True)(entry.edit)
app.command(name="delete, rm", no_args_is_help=True)(entry.delete)
app.command(name="undo, u")(entry.undo)
app.command(name="purge")(entry.purge)
app.command(name="search, s", no_args_is_help=True)(search.search)
app.command(name="stats")(stats.stats)
app.command(name="start", no_args_is_help=True)(timer.start)
app.command(name="stop")(timer.stop)
app.command(name="cancel")(timer.cancel)
app.command(name="status, st")(timer.status)
app.command(name="backups")(storage.backups)
app.command(name="restore")(storage.restore)
app.command(name="validate")(storage.validate)
app.add_typer(export.app, name="export", help="Write entries out as JSON or CSV")
app.add_typer(configuration.app, name="config, c", help="Show or create the config")


@app.callback()
def main_callback(
    data_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--data-dir",
            envvar="DID_DATA_DIR",
            help="Directory holding entries.jsonl, its backups and timer.json",
        ),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            envvar="DID_CONFIG",
            help="Configuration file to use instead of the default location",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")
    ] = False,
) -> None:
    """
    did - log what you did, and for how long

    Global options that apply to all commands.
    """
    configure_logging(verbose)
    state.set_config_path(config_path)
    state.set_data_dir(data_dir)


def run() -> None:
    app()
