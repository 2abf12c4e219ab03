"""Lexer for the table shell command language."""

import re

import ply.lex as lex

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\"}


class CommandLexer:
    """Lexer for tokenizing shell commands."""

    reserved = {
        "load": "LOAD",
        "row": "ROW",
        "cell": "CELL",
        "set": "SET",
        "show": "SHOW",
        "count": "COUNT",
        "save": "SAVE",
        "help": "HELP",
    }

    tokens = [
        "INTEGER",
        "STRING",
    ] + list(reserved.values())

    t_ignore = " \t\r"

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore

    def t_INTEGER(self, t: lex.LexToken) -> lex.LexToken:
        r"-?\d+"
        t.value = int(t.value)
        return t

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"([^"\\]|\\.)*"'
        t.value = re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), t.value[1:-1])
        return t

    def t_KEYWORD(self, t: lex.LexToken) -> lex.LexToken:
        r"[a-zA-Z_][a-zA-Z0-9_]*"
        keyword = self.reserved.get(t.value.lower())
        if keyword is None:
            raise SyntaxError(f"Unknown command word '{t.value}'")
        t.type = keyword
        return t

    def t_NEWLINE(self, t: lex.LexToken) -> None:
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at line {t.lineno}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
