"""Parsing for the table shell command language."""

from csv_tables.parsing.command_parser import (
    CellCommand,
    Command,
    CommandParser,
    CountCommand,
    HelpCommand,
    LoadCommand,
    RowCommand,
    SaveCommand,
    SetCommand,
    ShowCommand,
)

__all__ = [
    "CellCommand",
    "Command",
    "CommandParser",
    "CountCommand",
    "HelpCommand",
    "LoadCommand",
    "RowCommand",
    "SaveCommand",
    "SetCommand",
    "ShowCommand",
]
