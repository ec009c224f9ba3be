# rat23s/__init__.py
"""Rat23S front end: DFA-driven lexer and backtracking recursive-descent parser."""

from .lex import CharSource, Kind, Lexer, SymbolTable, Token
from .lex.analyze import LexicalError, first_error, format_token_table, tokenize
from .syntax import FatalSyntaxError, Parser, ProductionTrace, TraceSink, parse_file, parse_text

__version__ = "0.1.0"
