# SPDX-License-Identifier: MIT

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import typer
from rich.console import Console
from rich.markup import escape

from did.errors import DidError

log = logging.getLogger(__name__)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Print a DidError raised inside the block in red and exit with status 1."""
    try:
        yield
    except DidError as e:
        log.debug("command failed", exc_info=True)
        console = Console(stderr=True)
        console.print(f"[red]Error: {escape(str(e))}[/red]", highlight=False)
        if e.__cause__ is not None:
            console.print(
                f"[red]Cause: {escape(str(e.__cause__))}[/red]", highlight=False
            )
        if e.hint is not None:
            console.print(f"Hint: {escape(e.hint)}", highlight=False)
        raise typer.Exit(1)
