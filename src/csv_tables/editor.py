"""Exclusive editing sessions on a table store."""

from __future__ import annotations

from typing import Callable, Sequence

from csv_tables.errors import CellIndexError
from csv_tables.table import HandleState, ScopedHandle, TableStore

EditorState = HandleState


class TableEditor(ScopedHandle):
    """Holds exclusive access to one store until closed.

    The editor keeps no copy of the rows; every write goes through the
    store's single cell-update routine. While it is open no other editor or
    view can be opened on the same store, and direct reads on the store from
    the editor's own thread raise AccessConflictError.

        with store.edit() as editor:
            editor.update_cell(1, 2, "9")
    """

    def __init__(self, store: TableStore) -> None:
        store._lock.acquire_exclusive()
        super().__init__(store)

    @classmethod
    def open(cls, store: TableStore) -> TableEditor:
        return cls(store)

    def _release(self, store: TableStore) -> None:
        store._lock.release_exclusive()

    def __enter__(self) -> TableEditor:
        self._require_store()
        return self

    def update_cell(self, row_index: int, col_index: int, value: str) -> None:
        self._require_store()._update_cell(row_index, col_index, value)

    def update_row(self, row_index: int, values: Sequence[str]) -> None:
        """Overwrite the first len(values) cells of a row.

        Every target cell is checked before any is written, so a failure
        leaves the row untouched. The row index is checked even when values
        is empty.
        """
        store = self._require_store()
        if not 0 <= row_index < len(store._rows):
            raise CellIndexError(row_index, 0, "row", len(store._rows))
        for col_index in range(len(values)):
            store._check_cell(row_index, col_index)
        for col_index, value in enumerate(values):
            store._update_cell(row_index, col_index, value)

    def map_column(self, col_index: int, func: Callable[[str], str]) -> int:
        """Apply func to the given column in every row that is wide enough.

        Rows are rewritten one at a time. If func raises, rows already
        visited keep their new values and the rest are left as they were.

        Returns:
            Number of cells rewritten.

        Raises:
            CellIndexError: col_index is negative.
        """
        store = self._require_store()
        if col_index < 0:
            widest = max((len(row) for row in store._rows), default=0)
            raise CellIndexError(0, col_index, "column", widest)
        changed = 0
        for row_index in range(len(store._rows)):
            current = store._get_cell(row_index, col_index)
            if current is None:
                continue
            store._update_cell(row_index, col_index, func(current))
            changed += 1
        return changed
