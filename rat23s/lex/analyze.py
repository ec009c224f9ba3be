# rat23s/lex/analyze.py
"""Whole-file lexical pass: token listing and the pre-check run before parsing."""

from __future__ import annotations
from typing import Iterable, List, Optional

from . import Kind, Lexer, Token

# kinds short enough to need a second tab in the report
_WIDE_KINDS = (Kind.KEYWORD, Kind.INTEGER, Kind.REAL)


class LexicalError(SyntaxError):
    """First ERROR token met during a whole-file pass."""
    def __init__(self, token: Token, line: int):
        super().__init__(f"{line}: {token.lexeme}")
        self.token = token
        self.line = line
        self.message = token.lexeme


def tokenize(lexer: Lexer) -> List[Token]:
    """Every token of the input except comments and the final EOF.

    Raises LexicalError at the first invalid token.
    """
    out: List[Token] = []
    for tok in lexer:
        if tok.kind == Kind.ERROR:
            raise LexicalError(tok, lexer.get_line_number())
        if tok.kind != Kind.COMMENT:
            out.append(tok)
    return out


def first_error(lexer: Lexer) -> Optional[Token]:
    """Scan to end of input; return the first ERROR token, or None if the file is clean."""
    for tok in lexer:
        if tok.kind == Kind.ERROR:
            return tok
    return None


def format_token_table(tokens: Iterable[Token]) -> str:
    lines = ["Token\t\tLexeme"]
    for tok in tokens:
        sep = "\t\t" if tok.kind in _WIDE_KINDS else "\t"
        lines.append(f"{tok.kind}{sep}{tok.lexeme}")
    return "\n".join(lines) + "\n"
