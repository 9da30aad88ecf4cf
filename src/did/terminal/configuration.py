# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table
from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from did import configuration, state
from did.terminal.custom_typer import AliasedTyperGroup
from did.terminal.errors import exit_on_error

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("show, s")
def show(
    as_yaml: Annotated[
        bool, typer.Option("--yaml", help="Print the effective settings as YAML")
    ] = False,
) -> None:
    """Display the effective configuration, defaults included."""
    with exit_on_error():
        repository = state.get_configuration_repository()
        config = repository.get_config()
        data_path = state.get_data_path()

    console = Console()
    if as_yaml:
        console.print(dump(dict(config), Dumper=Dumper), end="", highlight=False)
        return

    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("week_start_day", config["week_start_day"])
    table.add_row("timezone", config["timezone"])
    table.add_row(
        "data_path",
        config["data_path"] if config["data_path"] else "None (platform default)",
    )
    table.add_row("deleted_retention_days", str(config["deleted_retention_days"]))
    console.print(table)

    console.print()
    console.print(f"Configuration file: {repository.config_path}", highlight=False)
    console.print(
        f"Entries file: {data_path / configuration.ENTRIES_FILE}", highlight=False
    )
    console.print(
        f"Timer file: {data_path / configuration.TIMER_FILE}", highlight=False
    )


@app.command("init, i")
def init(
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Overwrite an existing file")
    ] = False,
) -> None:
    """Write a commented sample configuration file."""
    console = Console()
    with exit_on_error():
        repository = state.get_configuration_repository()
        created = repository.write_sample_config(overwrite=force)

    if not created:
        console.print(
            f"[yellow]Configuration already exists at {repository.config_path}"
            " (use --force to overwrite)[/yellow]",
            highlight=False,
        )
        raise typer.Exit(1)
    console.print(
        f"[green]Wrote sample configuration to {repository.config_path}[/green]",
        highlight=False,
    )


@app.command("path, p")
def path() -> None:
    """Print the configuration file path."""
    print(state.get_configuration_repository().config_path)
