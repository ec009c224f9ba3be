# rat23s/syntax/__init__.py
"""Rat23S syntax analysis: recursive-descent parser, production trace and sink."""

from .parser import FAILED, MATCHED, FatalSyntaxError, Parser
from .runtime import open_files, parse_file, parse_text, precheck_file, run_parser
from .sink import TraceSink, format_token
from .trace import ProductionTrace
