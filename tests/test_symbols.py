"""Tests for the Rat23S symbol table."""

import pytest

from rat23s.lex.symbols import (
    KEYWORD,
    OPERATOR,
    RAT23S_KEYWORDS,
    RAT23S_OPERATORS,
    RAT23S_SEPARATORS,
    SEPARATOR,
    SymbolTable,
)


@pytest.fixture
def table() -> SymbolTable:
    return SymbolTable.rat23s()


class TestContents:
    def test_every_terminal_appears_once(self, table: SymbolTable) -> None:
        literals = RAT23S_KEYWORDS + RAT23S_OPERATORS + RAT23S_SEPARATORS
        assert len(set(literals)) == len(literals)
        assert len(table) == len(literals) == 32

    @pytest.mark.parametrize(
        ("spelling", "kind"),
        [
            ("function", KEYWORD),
            ("endwhile", KEYWORD),
            ("false", KEYWORD),
            ("<=", OPERATOR),
            ("=>", OPERATOR),
            ("!=", OPERATOR),
            ("/", OPERATOR),
            ("#", SEPARATOR),
            ("{", SEPARATOR),
            (",", SEPARATOR),
        ],
    )
    def test_kind_of(self, table: SymbolTable, spelling: str, kind: str) -> None:
        assert spelling in table
        assert table.kind_of(spelling) == kind

    def test_lookup_is_exact(self, table: SymbolTable) -> None:
        assert "Function" not in table
        with pytest.raises(KeyError):
            table.kind_of("[")


class TestSingleCharacterSymbols:
    @pytest.mark.parametrize("ch", ["=", "+", "-", "*", "/", ">", "<", "(", ")", "{", "}", ";", "#", ","])
    def test_single_char_entries(self, table: SymbolTable, ch: str) -> None:
        assert table.is_single_char_symbol(ch)

    @pytest.mark.parametrize("ch", ["!", "[", "]", "_", ".", "a", "<="])
    def test_not_single_char_entries(self, table: SymbolTable, ch: str) -> None:
        assert not table.is_single_char_symbol(ch)


class TestFreeze:
    def test_frozen_table_rejects_additions(self, table: SymbolTable) -> None:
        assert table.frozen
        with pytest.raises(TypeError):
            table.add("repeat", KEYWORD)

    def test_duplicate_spelling_rejected(self) -> None:
        t = SymbolTable()
        t.add("if", KEYWORD)
        with pytest.raises(ValueError):
            t.add("if", KEYWORD)

    def test_second_freeze_is_noop(self, table: SymbolTable) -> None:
        table.freeze([("repeat", KEYWORD)])
        assert "repeat" not in table
