"""Tests for the whole-file lexical pass and token table report."""

import pytest

from rat23s.lex import Kind, Lexer, Token
from rat23s.lex.analyze import LexicalError, first_error, format_token_table, tokenize


class TestTokenize:
    def test_comments_are_dropped(self) -> None:
        toks = tokenize(Lexer.from_text("[* header *] x = 1; [* trailer *]"))
        assert toks == [
            Token(Kind.IDENTIFIER, "x"),
            Token(Kind.OPERATOR, "="),
            Token(Kind.INTEGER, "1"),
            Token(Kind.SEPARATOR, ";"),
        ]

    def test_empty_input(self) -> None:
        assert tokenize(Lexer.from_text("  \n")) == []

    def test_first_error_raises(self) -> None:
        with pytest.raises(LexicalError) as ei:
            tokenize(Lexer.from_text("x = 1;\ny = 2 $ 3;\nz = @;"))
        assert ei.value.line == 2
        assert ei.value.message == "$ is an unrecognized symbol."
        assert ei.value.token.kind == Kind.ERROR

    def test_lexical_error_is_a_syntax_error(self) -> None:
        with pytest.raises(SyntaxError):
            tokenize(Lexer.from_text("1.2.3"))


class TestFirstError:
    def test_clean_file(self) -> None:
        assert first_error(Lexer.from_text("# # put(1);")) is None

    def test_reports_first_only(self) -> None:
        bad = first_error(Lexer.from_text("a = 1;\n[* unclosed"))
        assert bad == Token(Kind.ERROR, "Unclosed comment.")
        assert bad.line == 2


class TestTokenTable:
    def test_format(self) -> None:
        toks = tokenize(Lexer.from_text("while (x <= 2.5) put(true);"))
        assert format_token_table(toks) == (
            "Token\t\tLexeme\n"
            "keyword\t\twhile\n"
            "separator\t(\n"
            "identifier\tx\n"
            "operator\t<=\n"
            "real\t\t2.5\n"
            "separator\t)\n"
            "keyword\t\tput\n"
            "separator\t(\n"
            "keyword\t\ttrue\n"
            "separator\t)\n"
            "separator\t;\n"
        )

    def test_header_only_for_no_tokens(self) -> None:
        assert format_token_table([]) == "Token\t\tLexeme\n"
