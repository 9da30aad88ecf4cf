# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
import typer

from did.model.date_range import DateRange, DateRangeType
from did.time import parse_date, resolve_date_range


def resolve_range_options(
    now: pendulum.DateTime,
    week_start_day: str,
    tz: str,
    yesterday: bool = False,
    week: bool = False,
    last_week: bool = False,
    month: bool = False,
    last_month: bool = False,
    last: Optional[int] = None,
    from_date: Optional[str] = None,
    to_date: Optional[str] = None,
    default: Optional[DateRangeType] = DateRangeType.TODAY,
) -> Optional[DateRange]:
    """
    Turn the date range flags shared by list, search and stats into a range.

    At most one range flag may be given; --from and --to combine into one
    custom range. With no flag the `default` range is used, or None when
    `default` is None.
    """
    selected = [
        range_type
        for range_type, is_set in [
            (DateRangeType.YESTERDAY, yesterday),
            (DateRangeType.THIS_WEEK, week),
            (DateRangeType.LAST_WEEK, last_week),
            (DateRangeType.THIS_MONTH, month),
            (DateRangeType.LAST_MONTH, last_month),
            (DateRangeType.LAST_DAYS, last is not None),
            (DateRangeType.CUSTOM, from_date is not None or to_date is not None),
        ]
        if is_set
    ]
    if len(selected) > 1:
        raise typer.BadParameter("only one date range option can be used at a time")

    range_type = selected[0] if selected else default
    if range_type is None:
        return None

    local_now = now.in_tz(tz)
    return resolve_date_range(
        range_type,
        local_now,
        week_start_day=week_start_day,
        last_days=last,
        start=parse_date(from_date, tz) if from_date is not None else None,
        end=parse_date(to_date, tz) if to_date is not None else None,
    )
