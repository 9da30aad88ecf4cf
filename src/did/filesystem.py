# SPDX-License-Identifier: MIT

import os
import shutil
from pathlib import Path

FILE_MODE = 0o644
DIR_MODE = 0o755


class FileSystem:
    """
    The file operations the store, backup and timer code is allowed to use.

    Everything goes through an instance of this class so that tests can
    subclass it and make individual operations fail. Errors are plain
    `OSError`s; callers decide how to report them.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def make_dirs(self, path: Path) -> None:
        path.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)

    def read_text(self, path: Path) -> str:
        with open(path, encoding="utf-8", newline="") as file:
            return file.read()

    def read_bytes(self, path: Path) -> bytes:
        with open(path, "rb") as file:
            return file.read()

    def append_text(self, path: Path, text: str) -> None:
        fd = os.open(path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, FILE_MODE)
        with os.fdopen(fd, "a", encoding="utf-8", newline="") as file:
            file.write(text)

    def write_atomic(self, path: Path, data: bytes) -> None:
        """Write `data` to a sibling temp file and rename it over `path`."""
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
            with os.fdopen(fd, "wb") as file:
                file.write(data)
            os.replace(tmp_path, path)
        except OSError:
            if tmp_path.is_file():
                tmp_path.unlink()
            raise

    def copy_file(self, source: Path, destination: Path) -> None:
        shutil.copyfile(source, destination)
        os.chmod(destination, FILE_MODE)

    def rename(self, source: Path, destination: Path) -> None:
        os.replace(source, destination)

    def remove(self, path: Path) -> None:
        os.remove(path)
