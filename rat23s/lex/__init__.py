# rat23s/lex/__init__.py
"""Rat23S lexical analyzer.

Features
--------
- Identifier/keyword and integer/real lexemes are validated by explicit
  DFA transition tables (`dfsm.py`)
- Keywords are looked up case-insensitively; the lexeme keeps its case
- `=`, `==`, `=>`, `<`, `<=`, `!=` are told apart with one character of lookahead
- `[* ... *]` comments come out as a single `comment` token
- Lexical errors are **returned** as `ERROR` tokens (the message is the lexeme);
  the lexer never raises on bad input. The caller decides whether to halt.

Stop rule for identifier/number scanning: stop before whitespace, `!`, any
single-character symbol-table entry, or end of input. That is why `a+b`
splits into `a`, `+`, `b` even though `+` is in neither DFA's alphabet.

API
---
- `Token(kind, lexeme, line)`
- `Lexer(source)`
    - `get_token() -> Token`
    - `get_line_number() -> int`
    - `close()`
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, Optional

from .dfsm import DFSM, NUM_INTEGER, NUM_REAL, identifier_dfsm, is_digit, is_letter, number_dfsm
from .source import CharSource
from .symbols import SymbolTable

WHITESPACE = frozenset(" \t\v\n\r")


class Kind:
    IDENTIFIER = "identifier"
    KEYWORD    = "keyword"
    INTEGER    = "integer"
    REAL       = "real"
    OPERATOR   = "operator"
    SEPARATOR  = "separator"
    COMMENT    = "comment"
    EOF        = "EOF"
    ERROR      = "ERROR"


# --------- Public datatypes ---------

@dataclass(frozen=True)
class Token:
    kind: str       # one of Kind.*
    lexeme: str     # exact source text; the message for ERROR tokens
    line: int = field(default=0, compare=False)   # lexer line when the token ended

    @property
    def is_error(self) -> bool:
        return self.kind == Kind.ERROR


# --------- Core implementation ---------

class Lexer:
    """
    Lexer
    =====
    Pulls characters from a `CharSource` and produces one token per
    `get_token()` call. Owns its symbol table and both DFA tables; they are
    built here and never mutated.
    """

    def __init__(self, source: CharSource, symbols: Optional[SymbolTable] = None):
        self._src = source
        self._sym = symbols if symbols is not None else SymbolTable.rat23s()
        self._id_dfsm: DFSM = identifier_dfsm()
        self._num_dfsm: DFSM = number_dfsm()
        self._line = 1

    @classmethod
    def from_text(cls, text: str) -> "Lexer":
        return cls(CharSource.from_text(text))

    @property
    def symbols(self) -> SymbolTable:
        return self._sym

    def get_line_number(self) -> int:
        return self._line

    def close(self) -> None:
        self._src.close()

    def __iter__(self) -> Iterator[Token]:
        """Tokens up to, not including, end of input."""
        while True:
            tok = self.get_token()
            if tok.kind == Kind.EOF:
                return
            yield tok

    # ---- Public API ----
    def get_token(self) -> Token:
        ch = self._skip_whitespace()
        if ch is None:
            return self._tok(Kind.EOF, "")

        if is_letter(ch):
            return self._scan_identifier(ch)
        if is_digit(ch):
            return self._scan_number(ch)
        if ch == "=":
            return self._scan_equals()
        if ch == "<":
            return self._scan_less_than()
        if ch == "!":
            nxt = self._src.read()
            if nxt == "=":
                return self._tok(Kind.OPERATOR, "!=")
            self._push_back(nxt)
            return self._tok(Kind.ERROR, "! is an unrecognized symbol.")
        if ch == "[":
            return self._scan_comment()

        if self._sym.is_single_char_symbol(ch):
            return self._tok(self._sym.kind_of(ch), ch)
        return self._tok(Kind.ERROR, f"{ch} is an unrecognized symbol.")

    # ---- Internals ----
    def _tok(self, kind: str, lexeme: str) -> Token:
        return Token(kind, lexeme, self._line)

    def _push_back(self, ch: Optional[str]) -> None:
        if ch is not None:
            self._src.unget(ch)

    def _skip_whitespace(self) -> Optional[str]:
        """Return the first non-whitespace character (None at end of input)."""
        while True:
            ch = self._src.read()
            if ch is None or ch not in WHITESPACE:
                return ch
            if ch == "\n":
                self._line += 1

    def _stops_lexeme(self, ch: Optional[str]) -> bool:
        return (ch is None or ch in WHITESPACE or ch == "!"
                or self._sym.is_single_char_symbol(ch))

    def _consume_with(self, dfsm: DFSM, first: str) -> tuple[str, int]:
        """Collect `first` and what follows up to the stop set; run `dfsm` over it."""
        chars = [first]
        while True:
            ch = self._src.read()
            if self._stops_lexeme(ch):
                self._push_back(ch)
                break
            chars.append(ch)
        lexeme = "".join(chars)
        return lexeme, dfsm.run(lexeme)

    def _scan_identifier(self, first: str) -> Token:
        lexeme, state = self._consume_with(self._id_dfsm, first)
        if not self._id_dfsm.accepts(state):
            return self._tok(Kind.ERROR, f"{lexeme} is an invalid identifier name")
        if lexeme.lower() in self._sym:
            return self._tok(Kind.KEYWORD, lexeme)
        return self._tok(Kind.IDENTIFIER, lexeme)

    def _scan_number(self, first: str) -> Token:
        lexeme, state = self._consume_with(self._num_dfsm, first)
        if state == NUM_INTEGER:
            return self._tok(Kind.INTEGER, lexeme)
        if state == NUM_REAL:
            return self._tok(Kind.REAL, lexeme)
        return self._tok(Kind.ERROR, f"{lexeme} is an invalid integer/real value.")

    def _scan_equals(self) -> Token:
        nxt = self._src.read()
        if nxt == "=":
            return self._tok(Kind.OPERATOR, "==")
        if nxt == ">":
            return self._tok(Kind.OPERATOR, "=>")
        self._push_back(nxt)
        return self._tok(Kind.OPERATOR, "=")

    def _scan_less_than(self) -> Token:
        nxt = self._src.read()
        if nxt == "=":
            return self._tok(Kind.OPERATOR, "<=")
        self._push_back(nxt)
        return self._tok(Kind.OPERATOR, "<")

    def _scan_comment(self) -> Token:
        """`[` has been read. Comments run from `[*` to the first `*]`."""
        ch = self._src.read()
        if ch is None:
            return self._tok(Kind.ERROR, "Unclosed comment.")
        if ch != "*":
            self._src.unget(ch)
            return self._tok(Kind.ERROR, "[ is an unrecognized symbol.")

        while True:
            ch = self._src.read()
            if ch is None:
                return self._tok(Kind.ERROR, "Unclosed comment.")
            if ch == "*":
                nxt = self._src.read()
                if nxt is None:
                    return self._tok(Kind.ERROR, "Unclosed comment.")
                if nxt == "]":
                    return self._tok(Kind.COMMENT, "")
                # `*x`: x may itself be `*` or a newline, scan it again
                self._src.unget(nxt)
            elif ch == "\n":
                self._line += 1


__all__ = ["Kind", "Token", "Lexer", "CharSource", "SymbolTable"]
