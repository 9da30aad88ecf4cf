# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class Entry(TypedDict):
    timestamp: pendulum.DateTime  # When the work was logged
    description: str
    duration_minutes: int
    raw_input: str  # What the user typed, rebuilt on edit
    project: Optional[str]
    tags: list[str]
    deleted_at: Optional[pendulum.DateTime]  # Soft delete


class IndexedEntry(TypedDict):
    entry: Entry
    active_index: int  # 1-based, among active entries in file order
    storage_index: int  # 0-based line position in the store file
