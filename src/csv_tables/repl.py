"""Interactive shell for inspecting and editing delimited files."""

from __future__ import annotations

import argparse
import logging
import readline  # noqa: F401 - enables line editing in input()
import sys
from pathlib import Path

from csv_tables.commands import CommandExecutor, CommandResult
from csv_tables.errors import TableError
from csv_tables.format import TableFormat
from csv_tables.parsing import CommandParser

EXIT_WORDS = ("exit", "quit")


def _split_statements(content: str) -> list[str]:
    """Split content into statements on semicolons outside string literals."""
    statements = []
    current: list[str] = []
    in_string = False
    escape_next = False

    for ch in content:
        if escape_next:
            current.append(ch)
            escape_next = False
            continue

        if ch == "\\" and in_string:
            current.append(ch)
            escape_next = True
            continue

        if ch == '"':
            in_string = not in_string
            current.append(ch)
            continue

        if ch == ";" and not in_string:
            stmt = ''.join(current).strip()
            if stmt:
                statements.append(stmt)
            current = []
        else:
            current.append(ch)

    stmt = ''.join(current).strip()
    if stmt:
        statements.append(stmt)

    return statements


def _strip_comments(content: str) -> str:
    """Drop lines starting with '--'."""
    return "\n".join(line for line in content.split("\n") if not line.strip().startswith("--"))


def print_result(result: CommandResult) -> None:
    """Print a command result. Errors go to stderr."""
    if result.is_error:
        print(f"Error: {result.message}", file=sys.stderr)
        return
    if result.message is not None:
        print(result.message)
    for row in result.rows:
        print(" | ".join(row))


def run_statements(statements: list[str], executor: CommandExecutor, verbose: bool = False) -> int:
    """Execute statements in order, stopping at the first failure.

    Returns:
        0 on success, 1 on error
    """
    parser = CommandParser()
    for text in statements:
        if verbose:
            print(f">>> {text}")
        try:
            command = parser.parse(text)
        except SyntaxError as e:
            print(f"Syntax error: {e}", file=sys.stderr)
            return 1
        result = executor.execute(command)
        print_result(result)
        if result.is_error:
            return 1
    return 0


def run_file(file_path: Path, executor: CommandExecutor, verbose: bool = False) -> int:
    """Execute commands from a script file.

    Args:
        file_path: Path to the script
        executor: Session to run against (may already have a table loaded)
        verbose: If True, print each command before executing

    Returns:
        0 on success, 1 on error
    """
    try:
        content = file_path.read_text()
    except OSError as e:
        print(f"Error reading file: {e}", file=sys.stderr)
        return 1

    statements = _split_statements(_strip_comments(content))
    if not statements:
        print("No commands found in file", file=sys.stderr)
        return 1
    return run_statements(statements, executor, verbose)


def run_repl(executor: CommandExecutor) -> int:
    """Run the interactive shell until exit or end of input."""
    print("csvtables - delimited table shell")
    if executor.path is not None:
        print(f"Table: {executor.path}")
    else:
        print("No table loaded. Use 'load \"path\"' to open one.")
    print("Type 'help' for commands, 'exit' to quit.\n")

    parser = CommandParser()
    history_file = Path.home() / ".csvtables_history"
    try:
        readline.read_history_file(history_file)
    except (FileNotFoundError, OSError):
        pass

    try:
        while True:
            try:
                line = input("csv> ")
            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                print()
                continue

            stripped = line.strip()
            if not stripped:
                continue
            if stripped.rstrip(";").lower() in EXIT_WORDS:
                break

            for text in _split_statements(stripped):
                try:
                    command = parser.parse(text)
                except SyntaxError as e:
                    print(f"Syntax error: {e}")
                    continue
                print_result(executor.execute(command))
    finally:
        try:
            readline.write_history_file(history_file)
        except OSError:
            pass

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    arg_parser = argparse.ArgumentParser(
        description="Inspect and edit comma-delimited files"
    )
    arg_parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=None,
        help="Delimited file to load on startup (optional)",
    )
    arg_parser.add_argument(
        "-c", "--command",
        type=str,
        help="Execute commands (separated by ';') and exit",
    )
    arg_parser.add_argument(
        "-f", "--file",
        type=Path,
        help="Execute commands from a file and exit",
    )
    arg_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print each command before executing (for -c and -f)",
    )
    arg_parser.add_argument(
        "--delimiter",
        default=",",
        help="Field delimiter (default: ',')",
    )
    arg_parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Text encoding for reading and writing (default: utf-8)",
    )
    arg_parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        fmt = TableFormat(delimiter=args.delimiter, encoding=args.encoding)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    executor = CommandExecutor(fmt)
    if args.path is not None:
        if not args.path.exists():
            print(f"Error: File not found: {args.path}", file=sys.stderr)
            return 1
        try:
            executor.load(args.path)
        except TableError as e:
            print(f"Error loading table: {e}", file=sys.stderr)
            return 1

    if args.file:
        if not args.file.exists():
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            return 1
        return run_file(args.file, executor, args.verbose)

    if args.command:
        return run_statements(_split_statements(args.command), executor, args.verbose)

    return run_repl(executor)


if __name__ == "__main__":
    sys.exit(main())
