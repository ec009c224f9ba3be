# rat23s/syntax/sink.py
"""Text sink for the parser's production trace and fatal error report."""

from __future__ import annotations
from typing import Iterable, Optional, TextIO

from ..lex import Kind, Token

# kinds written with a single tab before "Lexeme:"
_NARROW_KINDS = (Kind.IDENTIFIER, Kind.SEPARATOR)


def format_token(tok: Token) -> str:
    sep = "\t" if tok.kind in _NARROW_KINDS else "\t\t"
    return f"Token: {tok.kind}{sep}Lexeme: {tok.lexeme}"


class TraceSink:
    """
    Append-only destination for parser output.

    Per matched terminal (`emit`)::

        \t<production>
        \t<production>
        Token: <kind>\tLexeme: <lexeme>

    On a fatal error (`fatal`)::

        <line>: ERROR - <message>
        \t<production> ...
        \tToken: <kind>\t\tLexeme: <lexeme>
    """

    def __init__(self, stream: TextIO, close_stream: bool = True):
        self._out = stream
        self._close_stream = close_stream
        self._closed = False
        self.blocks = 0

    @classmethod
    def to_path(cls, path: str) -> "TraceSink":
        return cls(open(path, "w", encoding="utf-8"))

    def _write_trace(self, trace: Iterable[str]) -> None:
        for label in trace:
            self._out.write(f"\t{label}\n")

    def emit(self, trace: Iterable[str], token: Token) -> None:
        self._write_trace(trace)
        self._out.write(format_token(token) + "\n")
        self.blocks += 1

    def fatal(self, line: int, message: str, trace: Iterable[str], token: Optional[Token]) -> None:
        self._out.write(f"{line}: ERROR - {message}\n")
        self._write_trace(trace)
        if token is not None:
            self._out.write("\t" + format_token(token) + "\n")

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._out.flush()
        if self._close_stream:
            self._out.close()
