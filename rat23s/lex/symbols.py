"""Terminal spellings of Rat23S mapped to their coarse token kind."""
from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Dict, Iterable, Iterator, Tuple

KEYWORD   = "keyword"
OPERATOR  = "operator"
SEPARATOR = "separator"

RAT23S_KEYWORDS: Tuple[str, ...] = (
    "function", "int", "bool", "real", "if", "fi", "else", "return",
    "put", "get", "while", "endwhile", "true", "false",
)
RAT23S_OPERATORS: Tuple[str, ...] = (
    "=", "+", "-", "*", "/", "==", "!=", ">", "<", "<=", "=>",
)
RAT23S_SEPARATORS: Tuple[str, ...] = ("(", ")", "{", "}", ";", "#", ",")


@dataclass
class SymbolTable:
    """
    SymbolTable
    ===========
    Maps each **exact terminal spelling** (keyword, operator, separator) to its
    kind. The table is filled once by `freeze()` and is read-only afterwards.

    Design
    ------
    - Every spelling must appear exactly once; a duplicate is a ValueError.
    - freeze() after freeze() is a no-op, `add()` on a frozen table is a TypeError.
    - Single-character spellings are cached separately: the lexer uses them
      as the stop set for identifier/number scanning.
    """

    _kinds: Dict[str, str] = field(default_factory=dict)
    _singles: frozenset = frozenset()
    _frozen: bool = False

    @classmethod
    def rat23s(cls) -> "SymbolTable":
        """The fixed Rat23S table."""
        table = cls()
        table.freeze(
            [(kw, KEYWORD) for kw in RAT23S_KEYWORDS]
            + [(op, OPERATOR) for op in RAT23S_OPERATORS]
            + [(sep, SEPARATOR) for sep in RAT23S_SEPARATORS]
        )
        return table

    def add(self, spelling: str, kind: str) -> None:
        if self._frozen:
            raise TypeError("SymbolTable is frozen")
        if spelling in self._kinds:
            raise ValueError(f"duplicate terminal spelling {spelling!r}")
        self._kinds[spelling] = kind

    def freeze(self, entries: Iterable[Tuple[str, str]] = ()) -> None:
        if self._frozen:
            return
        for spelling, kind in entries:
            self.add(spelling, kind)
        self._singles = frozenset(s for s in self._kinds if len(s) == 1)
        self._frozen = True

    # ----- lookup -----
    def kind_of(self, spelling: str) -> str:
        """Kind for an exact spelling. KeyError when absent."""
        return self._kinds[spelling]

    def is_single_char_symbol(self, ch: str) -> bool:
        return ch in self._singles

    def __contains__(self, spelling: object) -> bool:
        return spelling in self._kinds

    def __iter__(self) -> Iterator[str]:
        return iter(self._kinds)

    def __len__(self) -> int:
        return len(self._kinds)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __repr__(self) -> str:
        by_kind: Dict[str, list] = {}
        for spelling, kind in self._kinds.items():
            by_kind.setdefault(kind, []).append(spelling)
        return f"SymbolTable({by_kind})"
