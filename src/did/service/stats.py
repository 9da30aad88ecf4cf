# SPDX-License-Identifier: MIT

from typing import Optional

from did.model.date_range import DateRange
from did.model.entry import Entry
from did.model.filter import Filter
from did.model.stats import GroupTotal, Statistics
from did.query.filter import filter_entries
from did.repository import entry as entry_repository
from did.repository.store_context import StoreContext
from did.time import is_in_range

NO_PROJECT = "(no project)"
NO_TAGS = "(no tags)"


def __add_to_group(groups: dict[str, GroupTotal], name: str, minutes: int) -> None:
    if name not in groups:
        groups[name] = {"name": name, "minutes": 0, "entry_count": 0}
    groups[name]["minutes"] += minutes
    groups[name]["entry_count"] += 1


def __sorted_groups(groups: dict[str, GroupTotal]) -> list[GroupTotal]:
    return sorted(
        groups.values(), key=lambda group: (-group["minutes"], group["name"].lower())
    )


def summarize_entries(entries: list[Entry], date_range: DateRange) -> Statistics:
    """
    Sum the active entries that fall inside `date_range`.

    An entry with several tags counts fully towards each of them, so the
    tag totals can add up to more than `total_minutes`.
    """
    in_range = [
        entry
        for entry in entries
        if entry["deleted_at"] is None
        and is_in_range(entry["timestamp"], date_range["start"], date_range["end"])
    ]

    projects: dict[str, GroupTotal] = {}
    tags: dict[str, GroupTotal] = {}
    days: set[str] = set()
    total_minutes = 0

    for entry in in_range:
        minutes = entry["duration_minutes"]
        total_minutes += minutes
        local_timestamp = entry["timestamp"].in_tz(date_range["start"].timezone)
        days.add(local_timestamp.to_date_string())

        __add_to_group(projects, entry["project"] or NO_PROJECT, minutes)
        if entry["tags"]:
            for tag in entry["tags"]:
                __add_to_group(tags, tag, minutes)
        else:
            __add_to_group(tags, NO_TAGS, minutes)

    day_count = (
        date_range["end"].start_of("day") - date_range["start"].start_of("day")
    ).in_days() + 1

    return {
        "date_range": date_range,
        "total_minutes": total_minutes,
        "entry_count": len(in_range),
        "days_tracked": len(days),
        "average_minutes_per_day": total_minutes / day_count if day_count > 0 else 0.0,
        "projects": __sorted_groups(projects),
        "tags": __sorted_groups(tags),
    }


def calculate_stats(
    store: StoreContext, date_range: DateRange, filter: Optional[Filter] = None
) -> Statistics:
    entries = filter_entries(entry_repository.read_active_entries(store), filter)
    return summarize_entries(entries, date_range)
