# SPDX-License-Identifier: MIT

from typing import TypedDict

from did.model.date_range import DateRange


class GroupTotal(TypedDict):
    name: str
    minutes: int
    entry_count: int


class Statistics(TypedDict):
    date_range: DateRange
    total_minutes: int
    entry_count: int
    days_tracked: int
    average_minutes_per_day: float
    projects: list[GroupTotal]
    tags: list[GroupTotal]
