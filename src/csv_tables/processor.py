"""Batch edits applied to a table through an editor."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import IO, Iterable

from csv_tables.editor import TableEditor
from csv_tables.errors import CellIndexError
from csv_tables.format import TableFormat, join_row
from csv_tables.table import ScopedHandle, Source, TableStore

logger = logging.getLogger(__name__)


@dataclass
class CellEdit:
    """Replace the cell at (row, col) with value."""

    row: int
    col: int
    value: str


class TableProcessor:
    """Applies edits through an open editor it does not own."""

    def __init__(self, editor: TableEditor) -> None:
        self.editor = editor

    def apply(self, edits: Iterable[CellEdit], strict: bool = True) -> int:
        """Apply edits in order.

        Args:
            edits: Cell edits to apply.
            strict: If True the first out-of-range edit raises and the rest are
                not attempted. If False such edits are logged and skipped.

        Returns:
            The number of edits applied.
        """
        applied = 0
        for edit in edits:
            try:
                self.editor.update_cell(edit.row, edit.col, edit.value)
            except CellIndexError as e:
                if strict:
                    raise
                logger.warning(f"Skipping edit at ({edit.row}, {edit.col}): {e}")
                continue
            applied += 1
        logger.info(f"Applied {applied} cell edit{'s' if applied != 1 else ''}")
        return applied


def display(table: TableStore | ScopedHandle, out: IO[str] | None = None) -> None:
    """Print each row joined with the table's delimiter."""
    out = out or sys.stdout
    fmt = table.fmt
    for row in table.rows():
        print(join_row(row, fmt), file=out)


def process_file(
    source: Source,
    destination: Source,
    edits: Iterable[CellEdit],
    fmt: TableFormat | None = None,
    strict: bool = True,
) -> TableStore:
    """Parse source, apply edits in one editing session, write destination."""
    store = TableStore.parse(source, fmt)
    with store.edit() as editor:
        TableProcessor(editor).apply(edits, strict=strict)
    store.serialize(destination)
    return store
