"""
DepotView Exception Hierarchy
=============================

Row-level validation failures are raised by the row validators and always
caught by the batch parser, so they never leave the import engine. The other
exceptions signal caller mistakes or I/O failures around the engine.
"""

from typing import Optional


class DepotViewError(Exception):
    """Base exception for all DepotView errors."""


class RowValidationError(DepotViewError):
    """A single CSV row violated a field contract."""

    def __init__(self, field: Optional[str], message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class InvalidArgumentError(DepotViewError, ValueError):
    """A function was called with arguments that break its contract."""


class ImportBlockedError(DepotViewError):
    """An import was committed while row errors were still outstanding."""

    def __init__(self, error_count: int):
        self.error_count = error_count
        super().__init__(
            f"Import blocked: {error_count} row error(s) must be fixed before committing"
        )


class RecordNotFoundError(DepotViewError, KeyError):
    """A bank or position id is not present in the record store."""

    def __init__(self, kind: str, record_id: int):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")

    def __str__(self):
        return self.args[0]


class FileReadError(DepotViewError):
    """An uploaded file could not be read or decoded."""
