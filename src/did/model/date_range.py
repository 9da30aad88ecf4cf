# SPDX-License-Identifier: MIT

from enum import Enum
from typing import TypedDict

import pendulum


class DateRangeType(Enum):
    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    LAST_DAYS = "last_days"
    CUSTOM = "custom"


class DateRange(TypedDict):
    start: pendulum.DateTime
    end: pendulum.DateTime  # inclusive
    period: str  # human readable, e.g. "this week"
