# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from did import state
from did.query.filter import create_filter
from did.service.search import search_entries
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
from did.view.views.entry import search_results_report


def search(
    keyword: Annotated[str, typer.Argument(help="Text to look for in descriptions")],
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
    Search all entries, most recent first.
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
            default=None,
        )
        result = search_entries(
            store, keyword, date_range, create_filter(project=project, tags=tags)
        )

    search_results_report(result, tz=config["timezone"])
