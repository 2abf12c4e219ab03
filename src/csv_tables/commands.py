"""Executes shell commands against a table session."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path

from csv_tables.errors import TableError
from csv_tables.format import DEFAULT_FORMAT, TableFormat
from csv_tables.parsing import (
    CellCommand,
    Command,
    CountCommand,
    HelpCommand,
    LoadCommand,
    RowCommand,
    SaveCommand,
    SetCommand,
    ShowCommand,
)
from csv_tables.processor import display
from csv_tables.table import TableStore

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Commands:
  load "path"         Load a delimited file
  row N               Show row N (zero-based)
  cell R C            Show the cell at row R, column C
  set R C "value"     Replace the cell at row R, column C
  show                Print the whole table
  count               Print the number of rows
  save ["path"]       Write the table (to the loaded path if none given)
  help                Show this help
  exit | quit         Leave the shell"""


@dataclass
class CommandResult:
    """Result of a command execution."""

    message: str | None = None
    rows: list[tuple[str, ...]] = field(default_factory=list)
    is_error: bool = False


class CommandExecutor:
    """Holds the loaded table and applies commands to it."""

    def __init__(self, fmt: TableFormat | None = None) -> None:
        self.fmt = fmt or DEFAULT_FORMAT
        self.store: TableStore | None = None
        self.path: Path | None = None

    def load(self, path: Path) -> CommandResult:
        store = TableStore.parse(path, self.fmt)
        self.store = store
        self.path = path
        return CommandResult(message=f"Loaded {store.row_count} rows from {path}")

    def execute(self, command: Command) -> CommandResult:
        """Execute one parsed command. Table errors become error results."""
        try:
            return self._dispatch(command)
        except TableError as e:
            logger.debug(f"Command {command!r} failed: {e}")
            return CommandResult(message=str(e), is_error=True)

    def _dispatch(self, command: Command) -> CommandResult:
        if isinstance(command, HelpCommand):
            return CommandResult(message=HELP_TEXT)
        if isinstance(command, LoadCommand):
            return self.load(Path(command.path))

        store = self.store
        if store is None:
            return CommandResult(message="No table loaded. Use 'load \"path\"' first.", is_error=True)

        if isinstance(command, RowCommand):
            row = store.get_row(command.row)
            if row is None:
                return CommandResult(message=f"No row {command.row} (table has {store.row_count})", is_error=True)
            return CommandResult(rows=[row])
        elif isinstance(command, CellCommand):
            cell = store.get_cell(command.row, command.col)
            if cell is None:
                return CommandResult(message=f"No cell at ({command.row}, {command.col})", is_error=True)
            return CommandResult(message=cell)
        elif isinstance(command, SetCommand):
            with store.edit() as editor:
                editor.update_cell(command.row, command.col, command.value)
            return CommandResult(message=f"Updated cell ({command.row}, {command.col})")
        elif isinstance(command, ShowCommand):
            out = io.StringIO()
            display(store, out)
            return CommandResult(message=out.getvalue().rstrip("\n"))
        elif isinstance(command, CountCommand):
            return CommandResult(message=str(store.row_count))
        elif isinstance(command, SaveCommand):
            target = Path(command.path) if command.path is not None else self.path
            if target is None:
                return CommandResult(message="No destination path", is_error=True)
            store.serialize(target)
            return CommandResult(message=f"Saved {store.row_count} rows to {target}")
        else:
            return CommandResult(message=f"Unknown command: {command!r}", is_error=True)
