"""Delimited-text format settings and line splitting."""

from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import Iterable, Sequence

Row = list[str]


@dataclass(frozen=True)
class TableFormat:
    """How rows map to and from text.

    No quoting is applied in either direction: a cell containing the
    delimiter or the line terminator will not survive a round trip.
    """

    delimiter: str = ","
    line_terminator: str = "\n"
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {self.delimiter!r}")
        if not self.line_terminator:
            raise ValueError("Line terminator must not be empty")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {self.encoding!r}") from None


DEFAULT_FORMAT = TableFormat()


def split_lines(text: str, terminator: str = "\n") -> list[str]:
    """Split text on the line terminator.

    A terminator after the last line does not produce an extra empty line.
    With the default newline terminator a trailing carriage return is also
    dropped from each line, so CRLF input reads the same as LF input.
    """
    if not text:
        return []
    lines = text.split(terminator)
    if lines[-1] == "":
        lines.pop()
    if terminator != "\n":
        return lines
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_text(text: str, fmt: TableFormat = DEFAULT_FORMAT) -> list[Row]:
    """Parse text into rows, one per line, in input order."""
    return [line.split(fmt.delimiter) for line in split_lines(text, fmt.line_terminator)]


def join_row(row: Sequence[str], fmt: TableFormat = DEFAULT_FORMAT) -> str:
    return fmt.delimiter.join(row)


def serialize_rows(rows: Iterable[Sequence[str]], fmt: TableFormat = DEFAULT_FORMAT) -> str:
    """Serialize rows to text. Every row, including the last, is terminated."""
    return "".join(join_row(row, fmt) + fmt.line_terminator for row in rows)
