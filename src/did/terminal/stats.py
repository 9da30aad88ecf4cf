# SPDX-License-Identifier: MIT

from typing import cast

from did import state
from did.model.date_range import DateRange, DateRangeType
from did.query.filter import create_filter
from did.service.stats import calculate_stats
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
from did.view.views.stats import stats_report


def stats(
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
    Totals per project and tag, this week by default.
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
            default=DateRangeType.THIS_WEEK,
        )
        statistics = calculate_stats(
            store,
            cast(DateRange, date_range),
            create_filter(project=project, tags=tags),
        )

    stats_report(statistics)
