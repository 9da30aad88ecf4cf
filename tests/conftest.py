"""Shared fixtures for did tests."""

from pathlib import Path
from typing import Optional

import pendulum
import pytest

from did.filesystem import FileSystem
from did.model.entry import Entry
from did.repository.store_context import StoreContext

# A Monday, so week ranges are easy to reason about
FIXED_NOW = pendulum.datetime(2024, 1, 15, 12, 0, 0, tz="UTC")


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: pendulum.DateTime = FIXED_NOW):
        self.now = now

    def __call__(self) -> pendulum.DateTime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now.add(**kwargs)


class FailingFileSystem(FileSystem):
    """FileSystem whose listed operations raise PermissionError."""

    def __init__(self):
        self.failing: set[str] = set()

    def fail(self, *operations: str) -> None:
        self.failing.update(operations)

    def _check(self, operation: str, path: Path) -> None:
        if operation in self.failing:
            raise PermissionError(13, "Permission denied", str(path))

    def read_bytes(self, path):
        self._check("read_bytes", path)
        return super().read_bytes(path)

    def read_text(self, path):
        self._check("read_text", path)
        return super().read_text(path)

    def append_text(self, path, text):
        self._check("append_text", path)
        super().append_text(path, text)

    def write_atomic(self, path, data):
        self._check("write_atomic", path)
        super().write_atomic(path, data)

    def copy_file(self, source, destination):
        self._check("copy_file", destination)
        super().copy_file(source, destination)

    def rename(self, source, destination):
        self._check("rename", destination)
        super().rename(source, destination)

    def remove(self, path):
        self._check("remove", path)
        super().remove(path)


def make_entry(
    description: str = "work",
    duration_minutes: int = 60,
    timestamp: pendulum.DateTime = FIXED_NOW,
    project: Optional[str] = None,
    tags: Optional[list[str]] = None,
    deleted_at: Optional[pendulum.DateTime] = None,
) -> Entry:
    return {
        "timestamp": timestamp,
        "description": description,
        "duration_minutes": duration_minutes,
        "raw_input": f"{description} for {duration_minutes}m",
        "project": project,
        "tags": tags or [],
        "deleted_at": deleted_at,
    }


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fs():
    return FailingFileSystem()


@pytest.fixture
def store(tmp_path, clock, fs):
    return StoreContext(tmp_path / "entries.jsonl", clock=clock, fs=fs)


@pytest.fixture
def timer_store(tmp_path, clock, fs):
    return StoreContext(tmp_path / "timer.json", clock=clock, fs=fs)
