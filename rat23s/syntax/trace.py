"""Production trace: grammar rules applied since the last matched terminal."""
from __future__ import annotations
from typing import Iterator, List


class ProductionTrace:
    """
    Growable ordered list of production labels.

    Backtracking uses `snapshot()` (current length) and `restore(mark)`
    (truncate back to it) instead of copying the list before every alternative.
    """

    def __init__(self) -> None:
        self._labels: List[str] = []

    def push(self, label: str) -> None:
        self._labels.append(label)

    def snapshot(self) -> int:
        return len(self._labels)

    def restore(self, mark: int) -> None:
        if mark < 0 or mark > len(self._labels):
            raise ValueError(f"invalid trace mark {mark} (length {len(self._labels)})")
        del self._labels[mark:]

    def drain(self) -> List[str]:
        """Return the labels and clear the trace."""
        labels = self._labels
        self._labels = []
        return labels

    def clear(self) -> None:
        self._labels.clear()

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __repr__(self) -> str:
        return f"ProductionTrace({self._labels!r})"
