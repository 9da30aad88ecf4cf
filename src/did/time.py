# SPDX-License-Identifier: MIT

import re
from typing import Callable, Optional, cast

import pendulum

from did.errors import InvalidDateError
from did.model.date_range import DateRange, DateRangeType

Clock = Callable[[], pendulum.DateTime]

WEEK_START_DAYS = {"monday": 0, "sunday": 6}


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    parsed = pendulum.parse(datetime)
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"not a date-time: {datetime!r}")
    return parsed


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_to_display_local_datetime_str(
    datetime: pendulum.DateTime, tz: str = "local"
) -> str:
    return datetime.in_tz(tz).format("YYYY-MM-DD HH:mm")


def datetime_to_display_local_time_str(
    datetime: pendulum.DateTime, tz: str = "local"
) -> str:
    return datetime.in_tz(tz).format("HH:mm")


def start_of_day(datetime: pendulum.DateTime) -> pendulum.DateTime:
    return datetime.start_of("day")


def end_of_day(datetime: pendulum.DateTime) -> pendulum.DateTime:
    return datetime.end_of("day")


def start_of_week(
    datetime: pendulum.DateTime, week_start_day: str = "monday"
) -> pendulum.DateTime:
    """Return midnight of the first day of the week containing `datetime`."""
    first_weekday = WEEK_START_DAYS[week_start_day]
    days_back = (datetime.weekday() - first_weekday) % 7
    return datetime.subtract(days=days_back).start_of("day")


def end_of_week(
    datetime: pendulum.DateTime, week_start_day: str = "monday"
) -> pendulum.DateTime:
    return start_of_week(datetime, week_start_day).add(days=6).end_of("day")


def is_in_range(
    datetime: pendulum.DateTime, start: pendulum.DateTime, end: pendulum.DateTime
) -> bool:
    return start <= datetime <= end


def format_date_range_for_display(
    start: pendulum.DateTime, end: pendulum.DateTime
) -> str:
    if start.to_date_string() == end.to_date_string():
        return start.format("ddd, MMM D, YYYY")
    if start.year == end.year:
        return f"{start.format('MMM D')} - {end.format('MMM D, YYYY')}"
    return f"{start.format('MMM D, YYYY')} - {end.format('MMM D, YYYY')}"


def resolve_date_range(
    range_type: DateRangeType,
    now: pendulum.DateTime,
    week_start_day: str = "monday",
    last_days: Optional[int] = None,
    start: Optional[pendulum.DateTime] = None,
    end: Optional[pendulum.DateTime] = None,
) -> DateRange:
    """
    Turn a named range into concrete inclusive bounds.

    `now` must already be in the timezone the user thinks in; day and week
    boundaries are computed in that timezone.
    """
    if range_type == DateRangeType.TODAY:
        return {"start": start_of_day(now), "end": end_of_day(now), "period": "today"}
    if range_type == DateRangeType.YESTERDAY:
        yesterday = now.subtract(days=1)
        return {
            "start": start_of_day(yesterday),
            "end": end_of_day(yesterday),
            "period": "yesterday",
        }
    if range_type == DateRangeType.THIS_WEEK:
        return {
            "start": start_of_week(now, week_start_day),
            "end": end_of_week(now, week_start_day),
            "period": "this week",
        }
    if range_type == DateRangeType.LAST_WEEK:
        last_week_start = start_of_week(now, week_start_day).subtract(days=7)
        return {
            "start": last_week_start,
            "end": end_of_week(last_week_start, week_start_day),
            "period": "last week",
        }
    if range_type == DateRangeType.THIS_MONTH:
        return {
            "start": now.start_of("month"),
            "end": now.end_of("month"),
            "period": "this month",
        }
    if range_type == DateRangeType.LAST_MONTH:
        last_month = now.start_of("month").subtract(months=1)
        return {
            "start": last_month,
            "end": last_month.end_of("month"),
            "period": "last month",
        }
    if range_type == DateRangeType.LAST_DAYS:
        if last_days is None or last_days < 1:
            raise InvalidDateError("--last must be a positive number of days")
        return {
            "start": start_of_day(now.subtract(days=last_days - 1)),
            "end": end_of_day(now),
            "period": f"last {last_days} days",
        }
    if range_type == DateRangeType.CUSTOM:
        range_start = start_of_day(start) if start is not None else None
        range_end = end_of_day(end) if end is not None else None
        if range_start is None and range_end is None:
            raise InvalidDateError("a custom range needs --from and/or --to")
        if range_start is None:
            range_start = cast(pendulum.DateTime, range_end).start_of("day")
        if range_end is None:
            range_end = end_of_day(now)
        if range_start > range_end:
            raise InvalidDateError("start date must come before or equal the end date")
        return {
            "start": range_start,
            "end": range_end,
            "period": format_date_range_for_display(range_start, range_end),
        }
    raise ValueError(f"unknown date range type: {range_type}")


def parse_date(date_str: str, tz: str = "local") -> pendulum.DateTime:
    """
    Parse a calendar date given as YYYY-MM-DD or DD/MM/YYYY.

    Returns midnight of that day in `tz`.
    """
    date_str = date_str.strip()
    iso_match = re.match(r"^(\d{4})-(\d{2})-(\d{2})$", date_str)
    slash_match = re.match(r"^(\d{1,2})/(\d{1,2})/(\d{4})$", date_str)
    if iso_match:
        year, month, day = (int(part) for part in iso_match.groups())
    elif slash_match:
        day, month, year = (int(part) for part in slash_match.groups())
    else:
        raise InvalidDateError(f"invalid date '{date_str}'")

    try:
        return pendulum.datetime(year, month, day, tz=tz)
    except ValueError as e:
        raise InvalidDateError(f"invalid date '{date_str}': {e}") from e
