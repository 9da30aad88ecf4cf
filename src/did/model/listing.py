# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from did.model.date_range import DateRange
from did.model.entry import IndexedEntry
from did.model.storage import ParseWarning


class EntryListing(TypedDict):
    entries: list[IndexedEntry]  # sorted by timestamp, oldest first
    warnings: list[ParseWarning]
    date_range: Optional[DateRange]
    total_minutes: int


class SearchResult(TypedDict):
    entries: list[IndexedEntry]  # most recent first
    warnings: list[ParseWarning]
    query: str
    date_range: Optional[DateRange]
    total_minutes: int
