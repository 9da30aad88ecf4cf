# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from did.model.timer import TimerState


class DidError(Exception):
    """Base class for every error reported to the user."""

    hint: Optional[str] = None


class StorageError(DidError):
    """Raised when a file operation on the store, a backup or the timer fails."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path
        self.hint = f"Check that {path.parent} exists and is writable"


class TimerStateError(StorageError):
    """Raised when the timer file exists but cannot be read or decoded."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message, path)
        self.hint = f"Check or remove the timer file at {path}"


class ValidationError(DidError):
    pass


class EmptyDescriptionError(ValidationError):
    def __init__(self) -> None:
        super().__init__("description cannot be empty")
        self.hint = "Include a description along with @project and #tags"


class MissingDurationError(ValidationError):
    def __init__(self) -> None:
        super().__init__("missing 'for <duration>' in input")
        self.hint = "Use the form: did add 'fix login bug for 2h'"


class InvalidDurationError(ValidationError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.hint = "Use a format like '2h', '30m' or '1h30m', max 24h"


class InvalidIndexError(ValidationError):
    def __init__(self, index: int) -> None:
        super().__init__(f"index must be 1 or greater (got {index})")


class IndexOutOfRangeError(ValidationError):
    def __init__(self, index: int, valid_count: int, first: int = 1) -> None:
        if valid_count == 0:
            message = f"index {index} out of range: there are no entries"
        else:
            last = first + valid_count - 1
            message = f"index {index} out of range: valid range is {first}-{last}"
        super().__init__(message)
        self.index = index
        self.valid_count = valid_count
        self.hint = "List entries with 'did list' to see available indices"


class NoEntriesError(ValidationError):
    def __init__(self) -> None:
        super().__init__("no entries found")
        self.hint = "Create an entry first with 'did add \"<description> for <duration>\"'"


class NoChangesSpecifiedError(ValidationError):
    def __init__(self) -> None:
        super().__init__("at least one change must be specified")
        self.hint = "Pass --description and/or --duration"


class InvalidBackupNumberError(ValidationError):
    def __init__(self, number: int, max_count: int) -> None:
        super().__init__(
            f"invalid backup number {number}, must be between 1 and {max_count}"
        )
        self.number = number


class InvalidDateError(ValidationError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.hint = "Use format YYYY-MM-DD or DD/MM/YYYY"


class ConfigurationError(ValidationError):
    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path
        if path is not None:
            self.hint = f"Fix or remove the configuration file at {path}"


class NotFoundError(DidError):
    pass


class NoDeletedEntriesError(NotFoundError):
    def __init__(self) -> None:
        super().__init__("no deleted entries to restore")
        self.hint = "Delete an entry first with 'did delete <index>'"


class BackupNotFoundError(NotFoundError):
    def __init__(self, number: int) -> None:
        super().__init__(f"backup {number} does not exist")
        self.number = number
        self.hint = "List available backups with 'did backups'"


class StateConflictError(DidError):
    pass


class TimerAlreadyRunningError(StateConflictError):
    def __init__(self, existing: "TimerState") -> None:
        super().__init__("timer is already running")
        self.existing = existing
        self.hint = "Stop it with 'did stop' or restart with 'did start --force'"


class NoTimerRunningError(StateConflictError):
    def __init__(self) -> None:
        super().__init__("no timer is running")
        self.hint = "Start one with 'did start \"<description>\"'"
