# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from did import state
from did.model.filter import Filter
from did.model.listing import EntryListing
from did.query.filter import create_filter
from did.service import entry as entry_service
from did.service import export as export_service
from did.terminal.custom_typer import AliasedTyperGroup
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
from did.view.views.entry import warnings_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def __select_entries(
    yesterday: bool,
    week: bool,
    last_week: bool,
    month: bool,
    last_month: bool,
    last: Optional[int],
    from_date: Optional[str],
    to_date: Optional[str],
    project: Optional[str],
    tags: Optional[list[str]],
) -> tuple[EntryListing, Filter]:
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
        default=None,
    )
    filter = create_filter(project=project, tags=tags)
    return entry_service.list_entries(store, date_range, filter), filter


@app.command("json, j")
def to_json(
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
    Write entries to stdout as JSON, all of them by default.
    """
    with exit_on_error():
        listing, filter = __select_entries(
            yesterday,
            week,
            last_week,
            month,
            last_month,
            last,
            from_date,
            to_date,
            project,
            tags,
        )
        exported_at = state.get_entry_store().clock()

    warnings_view(listing["warnings"])
    typer.echo(export_service.export_json(listing, exported_at, filter), nl=False)


@app.command("csv, c")
def to_csv(
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
    Write entries to stdout as CSV, all of them by default.
    """
    with exit_on_error():
        listing, _ = __select_entries(
            yesterday,
            week,
            last_week,
            month,
            last_month,
            last,
            from_date,
            to_date,
            project,
            tags,
        )
        tz = state.get_config()["timezone"]

    warnings_view(listing["warnings"])
    typer.echo(export_service.export_csv(listing, tz), nl=False)
