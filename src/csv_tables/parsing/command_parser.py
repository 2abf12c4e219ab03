"""Parser for the table shell command language."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import ply.yacc as yacc

from csv_tables.parsing.command_lexer import CommandLexer


@dataclass
class LoadCommand:
    path: str


@dataclass
class RowCommand:
    row: int


@dataclass
class CellCommand:
    row: int
    col: int


@dataclass
class SetCommand:
    row: int
    col: int
    value: str


@dataclass
class ShowCommand:
    pass


@dataclass
class CountCommand:
    pass


@dataclass
class SaveCommand:
    """Write the table out. A None path means the path it was loaded from."""

    path: str | None = None


@dataclass
class HelpCommand:
    pass


Command = Union[
    LoadCommand,
    RowCommand,
    CellCommand,
    SetCommand,
    ShowCommand,
    CountCommand,
    SaveCommand,
    HelpCommand,
]


class CommandParser:
    """Parser for single shell commands."""

    tokens = CommandLexer.tokens

    def __init__(self) -> None:
        self.lexer = CommandLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_command(self, p: yacc.YaccProduction) -> None:
        """command : load
                   | row
                   | cell
                   | set
                   | show
                   | count
                   | save
                   | help"""
        p[0] = p[1]

    def p_load(self, p: yacc.YaccProduction) -> None:
        """load : LOAD STRING"""
        p[0] = LoadCommand(path=p[2])

    def p_row(self, p: yacc.YaccProduction) -> None:
        """row : ROW INTEGER"""
        p[0] = RowCommand(row=p[2])

    def p_cell(self, p: yacc.YaccProduction) -> None:
        """cell : CELL INTEGER INTEGER"""
        p[0] = CellCommand(row=p[2], col=p[3])

    def p_set(self, p: yacc.YaccProduction) -> None:
        """set : SET INTEGER INTEGER STRING"""
        p[0] = SetCommand(row=p[2], col=p[3], value=p[4])

    def p_show(self, p: yacc.YaccProduction) -> None:
        """show : SHOW"""
        p[0] = ShowCommand()

    def p_count(self, p: yacc.YaccProduction) -> None:
        """count : COUNT"""
        p[0] = CountCommand()

    def p_save_default(self, p: yacc.YaccProduction) -> None:
        """save : SAVE"""
        p[0] = SaveCommand()

    def p_save_path(self, p: yacc.YaccProduction) -> None:
        """save : SAVE STRING"""
        p[0] = SaveCommand(path=p[2])

    def p_help(self, p: yacc.YaccProduction) -> None:
        """help : HELP"""
        p[0] = HelpCommand()

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (line {p.lineno})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> Command:
        """Parse one command string."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        return self.parser.parse(data, lexer=self.lexer.lexer)
