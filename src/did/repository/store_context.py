# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional

from did.filesystem import FileSystem
from did.time import Clock, now_utc


class StoreContext:
    """
    Everything a store operation needs to touch the outside world.

    One context per file: the entry store, the timer file and (through
    `backup.get_backup_path`) the backup set all hang off a `StoreContext`.
    """

    def __init__(
        self,
        path: Path,
        clock: Optional[Clock] = None,
        fs: Optional[FileSystem] = None,
    ) -> None:
        self.path = Path(path)
        self.clock: Clock = clock if clock is not None else now_utc
        self.fs = fs if fs is not None else FileSystem()

    def with_path(self, path: Path) -> "StoreContext":
        return StoreContext(path, clock=self.clock, fs=self.fs)

    def __repr__(self) -> str:
        return f"StoreContext(path={str(self.path)!r})"
