# rat23s/ratc.py
"""ratc – Rat23S front-end CLI

Examples
    $ python -m rat23s.ratc lex tests/programs/minimal.rat -o tokens.txt
    $ python -m rat23s.ratc parse tests/programs/functions.rat -o trace.txt -D

Commands
--------
- lex   : run the lexer over the whole file and write the `Token / Lexeme` table
- parse : lexical pre-check, then syntax analysis; writes the production trace

Input/output paths that are not given on the command line are prompted for.
With -D/--debug, pipeline progress is printed to stderr.
"""

from __future__ import annotations
import argparse
import sys
from typing import Optional

# ------------------------------
# helpers
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _prompt(label: str) -> str:
    return input(f"Enter the name of {label}: ").strip()


def _resolve_paths(args) -> Optional[tuple[str, str]]:
    """Paths from the command line, prompting for the missing ones. None if stdin is closed."""
    try:
        in_path = args.file or _prompt("an input text file")
        out_path = args.output or _prompt("the output file you want to create/edit")
    except EOFError:
        _eprint("[ERROR] a file name is required but standard input is closed")
        return None
    return in_path, out_path

# ------------------------------
# commands
# ------------------------------

def cmd_lex(args) -> int:
    """Write the token table of the input file."""
    from .lex import Lexer
    from .lex.analyze import LexicalError, format_token_table, tokenize
    from .lex.source import CharSource

    paths = _resolve_paths(args)
    if paths is None:
        return 2
    in_path, out_path = paths

    # both files are opened before any token is read
    try:
        source = CharSource.from_path(in_path)
    except OSError as e:
        _eprint(f"[ERROR] Couldn't open file '{in_path}': {e.strerror}")
        return 2
    try:
        out = open(out_path, "w", encoding="utf-8")
    except OSError as e:
        source.close()
        _eprint(f"[ERROR] Couldn't create/edit file '{out_path}': {e.strerror}")
        return 2

    with out:
        try:
            if not args.keep_bom:
                source.skip_bom()
            lexer = Lexer(source)
            tokens = tokenize(lexer)
        except LexicalError as e:
            _eprint("[LEX ERROR]", f"line {e.line}: {e.message}")
            return 2
        finally:
            source.close()

        if args.debug:
            _eprint(f"[DEBUG] lexed {in_path} | tokens={len(tokens)} lines={lexer.get_line_number()}")

        try:
            out.write(format_token_table(tokens))
        except OSError as e:
            _eprint(f"[ERROR] Couldn't write file '{out_path}': {e.strerror}")
            return 2

    print(f"[LEX OK] tokens={len(tokens)} -> {out_path}")
    return 0


def cmd_parse(args) -> int:
    """Syntax analysis with production trace."""
    from .syntax.runtime import FatalSyntaxError, open_files, precheck_file, run_parser

    paths = _resolve_paths(args)
    if paths is None:
        return 2
    in_path, out_path = paths
    skip_bom = not args.keep_bom

    try:
        source, sink = open_files(in_path, out_path)
    except OSError as e:
        _eprint(f"[ERROR] Couldn't open file '{e.filename}': {e.strerror}")
        return 2

    if not args.no_precheck:
        try:
            bad = precheck_file(in_path, skip_bom=skip_bom)
        except OSError as e:
            _eprint(f"[ERROR] Couldn't open file '{in_path}': {e.strerror}")
            source.close()
            sink.close()
            return 2
        if bad is not None:
            source.close()
            sink.close()
            _eprint("[LEX ERROR]", f"line {bad.line}: {bad.lexeme}")
            return 2
        if args.debug:
            _eprint("[DEBUG] lexical pre-check passed")

    try:
        parser = run_parser(source, sink, skip_bom=skip_bom)
    except OSError as e:
        _eprint(f"[ERROR] {e.filename}: {e.strerror}")
        return 2
    except FatalSyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        if args.debug:
            _eprint(f"[DEBUG] offending token: {e.token!r}")
        return 2
    except RecursionError:
        _eprint("[ERROR] input nesting is too deep for the recursive-descent parser")
        return 2

    if args.debug:
        _eprint(f"[DEBUG] trace written to {out_path} | terminals={parser.matched}")
    print(f"[PARSE OK] terminals={parser.matched} -> {out_path}")
    return 0


# ------------------------------
# entry point
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="ratc", description="Rat23S lexer / syntax analyzer")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_lex = sub.add_parser("lex", help="write the token/lexeme table of a source file")
    p_lex.add_argument("file", nargs="?", help="Rat23S source file (prompted if omitted)")
    p_lex.add_argument("-o", "--output", help="output file path (prompted if omitted)")
    p_lex.add_argument("--keep-bom", action="store_true", help="do not skip a leading UTF-8 BOM")
    p_lex.add_argument("-D", "--debug", action="store_true", help="print debug information")
    p_lex.set_defaults(func=cmd_lex)

    p_parse = sub.add_parser("parse", help="check the syntax of a source file")
    p_parse.add_argument("file", nargs="?", help="Rat23S source file (prompted if omitted)")
    p_parse.add_argument("-o", "--output", help="production trace output path (prompted if omitted)")
    p_parse.add_argument("--no-precheck", action="store_true",
                         help="skip the whole-file lexical pass before parsing")
    p_parse.add_argument("--keep-bom", action="store_true", help="do not skip a leading UTF-8 BOM")
    p_parse.add_argument("-D", "--debug", action="store_true", help="print debug information")
    p_parse.set_defaults(func=cmd_parse)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
