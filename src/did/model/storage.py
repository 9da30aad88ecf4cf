# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import TypedDict

from did.model.entry import Entry


class ParseWarning(TypedDict):
    line_number: int  # 1-based
    content: str
    error: str


class ReadResult(TypedDict):
    entries: list[Entry]
    warnings: list[ParseWarning]
    storage_indexes: list[int]  # line position of each entry, same order


class StorageHealth(TypedDict):
    total_lines: int
    valid_entries: int
    corrupted_entries: int
    warnings: list[ParseWarning]


class BackupInfo(TypedDict):
    number: int  # 1 is the most recent
    path: Path
