"""Tests for the identifier and integer/real transition tables."""

import pytest

from rat23s.lex import Kind, Lexer
from rat23s.lex.dfsm import NUM_INTEGER, NUM_REAL, identifier_dfsm, number_dfsm


class TestIdentifierDfsm:
    def test_shape(self) -> None:
        d = identifier_dfsm()
        assert len(d.table) == 5
        assert all(len(row) == 4 for row in d.table)
        assert d.accepting == frozenset({0, 1, 2, 3})

    @pytest.mark.parametrize("text", ["a", "abc", "a1", "a_", "abc123_def", "x_1_y"])
    def test_accepts(self, text: str) -> None:
        d = identifier_dfsm()
        assert d.accepts(d.run(text))

    @pytest.mark.parametrize("text", ["a$", "a.b", "a$bc", "a[", "a?1"])
    def test_rejects_and_sticks(self, text: str) -> None:
        d = identifier_dfsm()
        assert d.run(text) == d.reject
        assert not d.accepts(d.run(text))

    def test_last_class_decides_state(self) -> None:
        d = identifier_dfsm()
        assert d.run("ab") == 1
        assert d.run("a1") == 2
        assert d.run("a_") == 3


class TestNumberDfsm:
    def test_shape(self) -> None:
        d = number_dfsm()
        assert len(d.table) == 4
        assert all(len(row) == 3 for row in d.table)

    @pytest.mark.parametrize(
        ("text", "state"),
        [
            ("0", NUM_INTEGER),
            ("123", NUM_INTEGER),
            ("1.5", NUM_REAL),
            ("10.25", NUM_REAL),
            ("1.", 1),
            ("1.2.3", 3),
            ("1..2", 3),
            ("12a", 3),
        ],
    )
    def test_final_states(self, text: str, state: int) -> None:
        assert number_dfsm().run(text) == state

    def test_reject_is_sticky(self) -> None:
        d = number_dfsm()
        assert d.run("1x23") == d.reject


class TestLexerUsesTables:
    @pytest.mark.parametrize("text", ["abc_1", "a$b", "a.b.c", "Z9"])
    def test_identifier_verdict_follows_run(self, text: str) -> None:
        d = identifier_dfsm()
        tok = Lexer.from_text(text).get_token()
        assert tok.lexeme == text or tok.is_error
        assert tok.is_error == (not d.accepts(d.run(text)))

    @pytest.mark.parametrize(
        ("text", "kind"),
        [("42", Kind.INTEGER), ("4.2", Kind.REAL), ("4.", Kind.ERROR), ("12a", Kind.ERROR)],
    )
    def test_number_kind_follows_run(self, text: str, kind: str) -> None:
        assert Lexer.from_text(text).get_token().kind == kind
        final = number_dfsm().run(text)
        assert (final == NUM_INTEGER) == (kind == Kind.INTEGER)
        assert (final == NUM_REAL) == (kind == Kind.REAL)
