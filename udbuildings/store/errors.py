"""Exceptions raised by the building store."""

from __future__ import annotations

from typing import Optional, Sequence


class StoreError(RuntimeError):
    """Base class for store failures."""


class StorageUnavailable(StoreError):
    """The database could be neither opened nor created."""


class StoreStateError(StoreError):
    """An operation was issued in the wrong lifecycle state."""


class SchemaVersionError(StoreError):
    """The stored schema is newer than the one this code expects."""

    def __init__(self, stored: int, expected: int) -> None:
        super().__init__(
            f"Stored schema version {stored} is newer than expected version {expected}"
        )
        self.stored = stored
        self.expected = expected


class ConstraintViolation(StoreError):
    """A write would duplicate a uniqueness-constrained field."""

    def __init__(self, fields: Sequence[str], message: str = "") -> None:
        self.fields = tuple(fields)
        super().__init__(message or f"Uniqueness constraint failed on: {', '.join(self.fields) or 'unknown'}")


class NotFound(StoreError):
    """No record has the requested identifier."""

    def __init__(self, identifier: int) -> None:
        super().__init__(f"No building with id {identifier}")
        self.identifier = identifier


class SeedParseFailure(StoreError):
    """The seed source could not be read or contains a malformed line."""

    def __init__(self, message: str, *, path: Optional[str] = None, line_no: Optional[int] = None) -> None:
        where = ""
        if path is not None:
            where = f"{path}:{line_no}" if line_no is not None else str(path)
        elif line_no is not None:
            where = f"line {line_no}"
        super().__init__(f"{where}: {message}" if where else message)
        self.path = path
        self.line_no = line_no
