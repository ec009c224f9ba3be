# dfsm.py
"""
Deterministic finite-state machines used by the lexer to validate
identifier/keyword and integer/real lexemes.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, FrozenSet, Tuple
import regex as re

_LETTER = re.compile(r"[A-Za-z]")
_DIGIT = re.compile(r"[0-9]")

# input classes
ID_LETTER, ID_DIGIT, ID_UNDERSCORE, ID_OTHER = 0, 1, 2, 3
NUM_DIGIT, NUM_POINT, NUM_OTHER = 0, 1, 2

# final states of the integer/real machine
NUM_INTEGER = 0
NUM_REAL = 2


def is_letter(ch: str) -> bool:
    return _LETTER.fullmatch(ch) is not None


def is_digit(ch: str) -> bool:
    return _DIGIT.fullmatch(ch) is not None


def classify_identifier_char(ch: str) -> int:
    if is_letter(ch):
        return ID_LETTER
    if is_digit(ch):
        return ID_DIGIT
    if ch == "_":
        return ID_UNDERSCORE
    return ID_OTHER


def classify_number_char(ch: str) -> int:
    if is_digit(ch):
        return NUM_DIGIT
    if ch == ".":
        return NUM_POINT
    return NUM_OTHER


@dataclass(frozen=True)
class DFSM:
    """
    DFSM
    ====
    Transition table N[state][input_class] -> next_state plus its classifier.

    Fields
    ------
    - table     : rows per state, one column per input class
    - start     : initial state
    - accepting : states that accept a lexeme
    - reject    : sticky trap state
    - classify  : character -> input class column

    The first character of a lexeme is fed through the table like any other
    one; the dispatcher in the lexer has already checked that it can start
    the lexeme.
    """
    table: Tuple[Tuple[int, ...], ...]
    start: int
    accepting: FrozenSet[int]
    reject: int
    classify: Callable[[str], int]

    def step(self, state: int, ch: str) -> int:
        return self.table[state][self.classify(ch)]

    def run(self, text: str) -> int:
        """Final state after feeding all of `text` from `start`."""
        state = self.start
        for ch in text:
            state = self.step(state, ch)
        return state

    def accepts(self, state: int) -> bool:
        return state in self.accepting


def identifier_dfsm() -> DFSM:
    """States 0-3 accept (start, after letter, after digit, after underscore), 4 rejects."""
    return DFSM(
        table=(
            (1, 2, 3, 4),
            (1, 2, 3, 4),
            (1, 2, 3, 4),
            (1, 2, 3, 4),
            (4, 4, 4, 4),
        ),
        start=0,
        accepting=frozenset({0, 1, 2, 3}),
        reject=4,
        classify=classify_identifier_char,
    )


def number_dfsm() -> DFSM:
    """0 = integer, 1 = seen '.', 2 = real, 3 = reject."""
    return DFSM(
        table=(
            (0, 1, 3),
            (2, 3, 3),
            (2, 3, 3),
            (3, 3, 3),
        ),
        start=0,
        accepting=frozenset({NUM_INTEGER, NUM_REAL}),
        reject=3,
        classify=classify_number_char,
    )
