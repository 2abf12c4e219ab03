"""Exceptions raised by the table engine."""

from __future__ import annotations

from pathlib import Path


class TableError(Exception):
    """Base class for all table engine errors."""


class ResourceError(TableError):
    """A source or destination could not be opened, read or written."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class ParseError(TableError, ValueError):
    """Input bytes could not be decoded into rows."""


class CellIndexError(TableError, IndexError):
    """A row or column index passed to a mutation is out of range."""

    def __init__(self, row_index: int, col_index: int, axis: str, limit: int) -> None:
        index = row_index if axis == "row" else col_index
        super().__init__(f"Invalid {axis} index: {index} (valid range [0, {limit}))")
        self.row_index = row_index
        self.col_index = col_index
        self.axis = axis
        self.limit = limit


class StaleHandleError(TableError, RuntimeError):
    """An editor or view was used after it was closed."""


class AccessConflictError(TableError, RuntimeError):
    """Requested access would conflict with a handle held by the same thread."""
