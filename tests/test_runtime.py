"""Tests for the file-level parse drivers."""

import io
from pathlib import Path

import pytest

from rat23s.lex import Kind
from rat23s.lex.source import CharSource
from rat23s.syntax import (
    FatalSyntaxError,
    TraceSink,
    open_files,
    parse_file,
    parse_text,
    precheck_file,
    run_parser,
)

EOF_LINE = "Token: EOF\t\tLexeme: \n"


# ###############
# parse_file
# ###############


class TestParseFile:
    @pytest.mark.parametrize("name", ["minimal.rat", "functions.rat", "bom.rat"])
    def test_valid_programs(self, programs: Path, tmp_path: Path, name: str) -> None:
        out = tmp_path / "trace.txt"
        parser = parse_file(str(programs / name), str(out))
        text = out.read_text(encoding="utf-8")
        assert text.endswith(EOF_LINE)
        assert "ERROR" not in text
        assert parser.matched == sum(line.startswith("Token: ") for line in text.splitlines())

    def test_minimal_terminal_count(self, programs: Path, tmp_path: Path) -> None:
        parser = parse_file(str(programs / "minimal.rat"), str(tmp_path / "t.txt"))
        assert parser.matched == 10

    def test_functions_uses_every_statement(self, programs: Path, tmp_path: Path) -> None:
        out = tmp_path / "trace.txt"
        parse_file(str(programs / "functions.rat"), str(out))
        text = out.read_text(encoding="utf-8")
        for form in ("<Compound>", "<Assign>", "<If>", "<Return>", "<Print>", "<Scan>", "<While>"):
            assert f"\t<Statement> -> {form}\n" in text
        assert "\t<Relop> -> =>\n" in text
        assert "\t<Primary Cont> -> ( <IDs> )\n" in text
        assert "Token: keyword\t\tLexeme: FI\n" in text

    def test_missing_fi(self, programs: Path, tmp_path: Path) -> None:
        out = tmp_path / "trace.txt"
        with pytest.raises(FatalSyntaxError) as ei:
            parse_file(str(programs / "missing_fi.rat"), str(out))
        assert ei.value.line == 3
        assert ei.value.message == "expected 'fi' or 'else'"
        # the report is flushed to disk before the error propagates
        text = out.read_text(encoding="utf-8")
        assert "3: ERROR - expected 'fi' or 'else'\n" in text
        assert text.endswith("\tToken: EOF\t\tLexeme: \n")

    def test_bom_kept_is_a_lexical_error(self, programs: Path, tmp_path: Path) -> None:
        with pytest.raises(FatalSyntaxError) as ei:
            parse_file(str(programs / "bom.rat"), str(tmp_path / "t.txt"), skip_bom=False)
        assert ei.value.message == "ï is an unrecognized symbol."
        assert ei.value.line == 1
        assert ei.value.token.kind == Kind.ERROR

    def test_missing_input(self, tmp_path: Path) -> None:
        out = tmp_path / "t.txt"
        with pytest.raises(OSError):
            parse_file(str(tmp_path / "nope.rat"), str(out))
        assert not out.exists()

    def test_unwritable_output(self, programs: Path, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            parse_file(str(programs / "minimal.rat"), str(tmp_path / "no" / "such" / "dir.txt"))

    def test_deep_nesting_raises_recursion_error(self, tmp_path: Path) -> None:
        src = tmp_path / "deep.rat"
        src.write_text("# # " + "{ " * 5000 + "x = 1; " + "} " * 5000, encoding="utf-8")
        with pytest.raises(RecursionError):
            parse_file(str(src), str(tmp_path / "t.txt"))


# ###############
# In-memory drivers
# ###############


class TestRunParser:
    def test_parse_text_leaves_stream_open(self) -> None:
        out = io.StringIO()
        parse_text("# # put(1);", out)
        assert not out.closed
        assert out.getvalue().endswith(EOF_LINE)

    def test_parse_text_close_stream(self) -> None:
        out = io.StringIO()
        parse_text("# # put(1);", out, close_stream=True)
        assert out.closed

    def test_closed_after_fatal(self) -> None:
        source = CharSource.from_text("# # put(1")
        sink = TraceSink(io.StringIO(), close_stream=False)
        with pytest.raises(FatalSyntaxError):
            run_parser(source, sink)
        assert source.closed
        assert sink.closed

    def test_closed_after_recursion_error(self) -> None:
        source = CharSource.from_text("# # " + "{" * 5000)
        sink = TraceSink(io.StringIO(), close_stream=False)
        with pytest.raises(RecursionError):
            run_parser(source, sink)
        assert source.closed
        assert sink.closed

    def test_bom_skipped_by_default(self) -> None:
        out = io.StringIO()
        parser = parse_text("\ufeff# # put(7);", out)
        assert parser.matched == 8


# ###############
# precheck_file
# ###############


class TestPrecheck:
    def test_clean_file(self, programs: Path) -> None:
        assert precheck_file(str(programs / "functions.rat")) is None

    def test_reports_first_error(self, programs: Path) -> None:
        bad = precheck_file(str(programs / "bad_symbol.rat"))
        assert bad is not None
        assert bad.kind == Kind.ERROR
        assert bad.lexeme == "$ is an unrecognized symbol."
        assert bad.line == 2

    def test_syntax_errors_are_not_lexical(self, programs: Path) -> None:
        assert precheck_file(str(programs / "missing_fi.rat")) is None

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            precheck_file(str(tmp_path / "nope.rat"))


# ###############
# open_files
# ###############


class TestOpenFiles:
    def test_opens_both(self, programs: Path, tmp_path: Path) -> None:
        out = tmp_path / "t.txt"
        source, sink = open_files(str(programs / "minimal.rat"), str(out))
        assert not source.closed
        assert out.exists()
        source.close()
        sink.close()

    def test_missing_input_creates_no_output(self, tmp_path: Path) -> None:
        out = tmp_path / "t.txt"
        with pytest.raises(OSError):
            open_files(str(tmp_path / "nope.rat"), str(out))
        assert not out.exists()

    def test_unwritable_output(self, programs: Path, tmp_path: Path) -> None:
        with pytest.raises(OSError) as ei:
            open_files(str(programs / "minimal.rat"), str(tmp_path / "no" / "t.txt"))
        assert "no" in str(ei.value.filename)
