# rat23s/syntax/runtime.py
"""Syntax-analysis drivers.

- Wire a `CharSource` -> `Lexer` -> `Parser` -> `TraceSink` pipeline and run
  the start production `<Rat23S>`.
- A committed syntax error (or a lexical error met while parsing) surfaces as
  `FatalSyntaxError`; by then the report has been written to the sink and
  both the source and the sink are closed.
"""

from __future__ import annotations
from typing import Optional, TextIO, Tuple

from ..lex import Lexer, Token
from ..lex.analyze import first_error
from ..lex.source import CharSource
from .parser import FatalSyntaxError, Parser
from .sink import TraceSink


def run_parser(source: CharSource, sink: TraceSink, *, skip_bom: bool = True) -> Parser:
    """Parse everything `source` yields into `sink`.

    Parameters
    ----------
    source : CharSource
        Input characters. Closed when the parse ends.
    sink : TraceSink
        Receives one trace block per matched terminal. Closed when the parse ends.
    skip_bom : bool
        Drop a leading UTF-8 byte-order mark first.

    Returns
    -------
    Parser
        The finished parser (`matched` holds the number of terminals).
        Raises `FatalSyntaxError` on the first committed failure.
    """
    if skip_bom:
        source.skip_bom()
    parser = Parser(Lexer(source), sink)
    parser.rat23s()
    return parser


def parse_text(text: str, out: TextIO, *, close_stream: bool = False) -> Parser:
    """Parse `text`, writing the trace to `out` (left open unless `close_stream`)."""
    return run_parser(CharSource.from_text(text), TraceSink(out, close_stream=close_stream))


def open_files(in_path: str, out_path: str) -> Tuple[CharSource, TraceSink]:
    """Open the input and the trace output. OSError propagates with nothing left open."""
    source = CharSource.from_path(in_path)
    try:
        sink = TraceSink.to_path(out_path)
    except OSError:
        source.close()
        raise
    return source, sink


def parse_file(in_path: str, out_path: str, *, skip_bom: bool = True) -> Parser:
    """Parse the file at `in_path` and write the trace to `out_path`.

    Both files are opened before analysis starts; OSError propagates.
    """
    source, sink = open_files(in_path, out_path)
    return run_parser(source, sink, skip_bom=skip_bom)


def precheck_file(in_path: str, *, skip_bom: bool = True) -> Optional[Token]:
    """Whole-file lexical pre-check. Returns the first ERROR token, or None."""
    source = CharSource.from_path(in_path)
    try:
        if skip_bom:
            source.skip_bom()
        return first_error(Lexer(source))
    finally:
        source.close()


__all__ = ["run_parser", "parse_text", "open_files", "parse_file", "precheck_file",
           "FatalSyntaxError"]
