"""In-memory table store for delimited-text data."""

from __future__ import annotations

import enum
import io
import logging
import os
import threading
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Iterable, Sequence, Union

from csv_tables.errors import CellIndexError, ParseError, ResourceError, StaleHandleError
from csv_tables.format import DEFAULT_FORMAT, Row, TableFormat, parse_text, serialize_rows
from csv_tables.locking import AccessLock

if TYPE_CHECKING:
    from csv_tables.editor import TableEditor

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", IO[Any]]


def _is_path(target: Any) -> bool:
    return isinstance(target, (str, os.PathLike))


class TableStore:
    """Owns an ordered list of rows.

    Reads take shared access for the length of the call and update_cell takes
    exclusive access, so a reader never observes a half-applied write. Longer
    sessions go through shared() or edit(), which hold the access mode until
    the returned handle is closed.
    """

    def __init__(self, rows: Iterable[Sequence[str]] | None = None, fmt: TableFormat | None = None) -> None:
        self.fmt = fmt or DEFAULT_FORMAT
        self._rows: list[Row] = [[str(cell) for cell in row] for row in rows or []]
        self._lock = AccessLock()

    # -- construction -----------------------------------------------------

    @classmethod
    def parse(cls, source: Source, fmt: TableFormat | None = None) -> TableStore:
        """Read a whole file or stream and parse it into a new store.

        Args:
            source: A path, or an open binary or text stream. Paths are opened
                and closed here; streams are read but left open.
            fmt: Delimiter, terminator and encoding. Defaults to comma/newline/UTF-8.

        Returns:
            A store with one row per input line. Empty input gives zero rows.

        Raises:
            ResourceError: The file could not be opened or read.
            ParseError: The bytes could not be decoded.
        """
        fmt = fmt or DEFAULT_FORMAT
        if _is_path(source):
            path = Path(source)  # type: ignore[arg-type]
            try:
                with open(path, "rb") as f:
                    data = f.read()
            except OSError as e:
                raise ResourceError(f"Cannot read {path}: {e.strerror or e}", path) from e
            name = str(path)
        else:
            try:
                data = source.read()  # type: ignore[union-attr]
            except OSError as e:
                raise ResourceError(f"Cannot read from stream: {e}") from e
            except UnicodeDecodeError as e:
                raise ParseError(f"Cannot decode stream: {e}") from e
            name = getattr(source, "name", "<stream>")

        if isinstance(data, bytes):
            try:
                text = data.decode(fmt.encoding)
            except UnicodeDecodeError as e:
                raise ParseError(f"Cannot decode {name} as {fmt.encoding}: {e}") from e
        else:
            text = data

        store = cls(fmt=fmt)
        store._rows = parse_text(text, fmt)
        logger.debug(f"Parsed {len(store._rows)} rows from {name}")
        return store

    @classmethod
    def loads(cls, text: str, fmt: TableFormat | None = None) -> TableStore:
        """Parse in-memory text into a new store."""
        fmt = fmt or DEFAULT_FORMAT
        store = cls(fmt=fmt)
        store._rows = parse_text(text, fmt)
        return store

    # -- serialization ----------------------------------------------------

    def dumps(self) -> str:
        with self._lock.shared():
            return self._dumps()

    def _dumps(self) -> str:
        return serialize_rows(self._rows, self.fmt)

    def serialize(self, destination: Source) -> None:
        """Write every row to a path or an open stream.

        Text streams receive str, anything else receives encoded bytes. The
        store is not modified.

        Raises:
            ResourceError: The destination could not be created or written.
        """
        text = self.dumps()
        if _is_path(destination):
            path = Path(destination)  # type: ignore[arg-type]
            try:
                with open(path, "wb") as f:
                    f.write(text.encode(self.fmt.encoding))
            except OSError as e:
                raise ResourceError(f"Cannot write {path}: {e.strerror or e}", path) from e
            logger.debug(f"Wrote {text.count(self.fmt.line_terminator)} rows to {path}")
            return

        try:
            if isinstance(destination, io.TextIOBase):
                destination.write(text)
            else:
                destination.write(text.encode(self.fmt.encoding))  # type: ignore[union-attr]
        except OSError as e:
            raise ResourceError(f"Cannot write to stream: {e}") from e

    # -- reads --------------------------------------------------------------

    @property
    def row_count(self) -> int:
        with self._lock.shared():
            return len(self._rows)

    def __len__(self) -> int:
        return self.row_count

    def get_row(self, row_index: int) -> tuple[str, ...] | None:
        """Return a read-only copy of a row, or None if out of range."""
        with self._lock.shared():
            return self._get_row(row_index)

    def get_cell(self, row_index: int, col_index: int) -> str | None:
        """Return one cell, or None if either index is out of range."""
        with self._lock.shared():
            return self._get_cell(row_index, col_index)

    def rows(self) -> list[tuple[str, ...]]:
        with self._lock.shared():
            return [tuple(row) for row in self._rows]

    def _get_row(self, row_index: int) -> tuple[str, ...] | None:
        if 0 <= row_index < len(self._rows):
            return tuple(self._rows[row_index])
        return None

    def _get_cell(self, row_index: int, col_index: int) -> str | None:
        if not 0 <= row_index < len(self._rows):
            return None
        row = self._rows[row_index]
        if not 0 <= col_index < len(row):
            return None
        return row[col_index]

    # -- mutation -----------------------------------------------------------

    def update_cell(self, row_index: int, col_index: int, value: str) -> None:
        """Replace one cell in place.

        Raises:
            CellIndexError: Either index is out of range. Nothing is changed.
        """
        with self._lock.exclusive():
            self._update_cell(row_index, col_index, value)

    def _check_cell(self, row_index: int, col_index: int) -> None:
        if not 0 <= row_index < len(self._rows):
            raise CellIndexError(row_index, col_index, "row", len(self._rows))
        width = len(self._rows[row_index])
        if not 0 <= col_index < width:
            raise CellIndexError(row_index, col_index, "column", width)

    def _update_cell(self, row_index: int, col_index: int, value: str) -> None:
        # Caller must hold exclusive access.
        self._check_cell(row_index, col_index)
        self._rows[row_index][col_index] = value

    # -- handles ----------------------------------------------------------

    def shared(self) -> TableView:
        """Open a read-only view. Use as a context manager."""
        return TableView(self)

    def edit(self) -> TableEditor:
        """Open an exclusive editor. Use as a context manager."""
        from csv_tables.editor import TableEditor

        return TableEditor(self)

    def __repr__(self) -> str:
        return f"TableStore(rows={len(self._rows)}, delimiter={self.fmt.delimiter!r})"


class HandleState(enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


class ScopedHandle:
    """Base for handles that hold one access mode on a store until closed.

    Handles are bound to the thread that opened them and must be closed
    there.
    """

    def __init__(self, store: TableStore) -> None:
        self._store: TableStore | None = store
        self._owner = threading.get_ident()
        self.state = HandleState.OPEN

    def _release(self, store: TableStore) -> None:
        raise NotImplementedError

    @property
    def is_open(self) -> bool:
        return self.state is HandleState.OPEN

    def _require_store(self) -> TableStore:
        if self._store is None:
            raise StaleHandleError(f"{type(self).__name__} has been closed")
        return self._store

    def close(self) -> None:
        """Release access. Closing an already closed handle does nothing."""
        if self._store is None:
            return
        if threading.get_ident() != self._owner:
            raise RuntimeError(f"{type(self).__name__} must be closed by the thread that opened it")
        store, self._store = self._store, None
        self.state = HandleState.CLOSED
        self._release(store)

    def __enter__(self) -> Any:
        self._require_store()
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # Reads are available through either access mode.

    @property
    def row_count(self) -> int:
        return len(self._require_store()._rows)

    def get_row(self, row_index: int) -> tuple[str, ...] | None:
        return self._require_store()._get_row(row_index)

    def get_cell(self, row_index: int, col_index: int) -> str | None:
        return self._require_store()._get_cell(row_index, col_index)

    def rows(self) -> list[tuple[str, ...]]:
        return [tuple(row) for row in self._require_store()._rows]

    def dumps(self) -> str:
        return self._require_store()._dumps()

    @property
    def fmt(self) -> TableFormat:
        return self._require_store().fmt


class TableView(ScopedHandle):
    """Read-only handle holding shared access to a store."""

    def __init__(self, store: TableStore) -> None:
        store._lock.acquire_shared()
        super().__init__(store)

    def _release(self, store: TableStore) -> None:
        store._lock.release_shared()

    def __enter__(self) -> TableView:
        self._require_store()
        return self
