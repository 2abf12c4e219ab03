"""CSV Tables - An in-memory table engine for delimited text."""

from csv_tables.editor import EditorState, TableEditor
from csv_tables.errors import (
    AccessConflictError,
    CellIndexError,
    ParseError,
    ResourceError,
    StaleHandleError,
    TableError,
)
from csv_tables.format import DEFAULT_FORMAT, TableFormat
from csv_tables.processor import CellEdit, TableProcessor, process_file
from csv_tables.table import HandleState, TableStore, TableView

__all__ = [
    # Main API
    "TableStore",
    "TableEditor",
    "TableView",
    "HandleState",
    "EditorState",
    # Format
    "TableFormat",
    "DEFAULT_FORMAT",
    # Processing
    "CellEdit",
    "TableProcessor",
    "process_file",
    # Errors
    "TableError",
    "ResourceError",
    "ParseError",
    "CellIndexError",
    "StaleHandleError",
    "AccessConflictError",
]

__version__ = "0.1.0"
