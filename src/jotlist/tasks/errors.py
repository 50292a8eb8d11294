# src/jotlist/tasks/errors.py

"""
Error taxonomy for the task engine.

- ParseError: bad user input (dates, id lists). Raised before any mutation.
- TaskValidationError: a task would violate its invariants (empty text, bad id).
- StorageError: anything the task file layer reports. Corruption and I/O problems
  are separate kinds because the CLI reacts differently (restore vs. give up).

"Not found" is not an error: batch operations report it per id.
"""

from __future__ import annotations

from pathlib import Path


class JotlistError(Exception):
    """Base class for every error the task engine raises on purpose."""


class ParseError(JotlistError, ValueError):
    def __init__(self, value: str, message: str) -> None:
        super().__init__(message)
        self.value = value


class DateParseError(ParseError):
    def __init__(self, value: str, reason: str) -> None:
        super().__init__(value, f"Invalid date '{value}': {reason}")
        self.reason = reason


class IdParseError(ParseError):
    def __init__(self, value: str, reason: str = "not a positive integer") -> None:
        super().__init__(value, f"Invalid task id '{value}': {reason}")
        self.reason = reason


class EmptyIdListError(IdParseError):
    def __init__(self) -> None:
        ParseError.__init__(self, "", "No task ids given")
        self.reason = "no ids"


class TaskValidationError(JotlistError, ValueError):
    pass


class StorageError(JotlistError):
    def __init__(self, path: Path, message: str) -> None:
        super().__init__(message)
        self.path = Path(path)


class CorruptionError(StorageError):
    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(path, f"Task file '{path}' is corrupted: {detail}")
        self.detail = detail


class StorageIOError(StorageError):
    def __init__(self, path: Path, action: str, error: OSError) -> None:
        reason = error.strerror or str(error)
        super().__init__(path, f"Failed to {action} '{path}': {reason}")
        self.action = action


class RestoreError(StorageError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(path, f"Restore failed, nothing was changed: {reason}")
        self.reason = reason
