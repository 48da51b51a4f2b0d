"""Offset <-> (line, column) conversion for a buffer."""

from __future__ import annotations

from bisect import bisect_right
from typing import List, Tuple


class LineIndex:
    """Start offsets of every ``\\n``-separated line in ``text``."""

    def __init__(self, text: str) -> None:
        self._length = len(text)
        starts: List[int] = [0]
        pos = text.find("\n")
        while pos != -1:
            starts.append(pos + 1)
            pos = text.find("\n", pos + 1)
        self._starts = starts

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def locate(self, offset: int) -> Tuple[int, int]:
        """Return ``(line, column)`` with a 1-based line for ``offset``."""

        offset = max(0, min(offset, self._length))
        row = bisect_right(self._starts, offset) - 1
        return row + 1, offset - self._starts[row]

    def line_range(self, line: int) -> Tuple[int, int]:
        """``[start, end)`` of ``line`` (1-based), excluding its newline."""

        row = max(1, min(line, self.line_count)) - 1
        start = self._starts[row]
        if row + 1 < len(self._starts):
            end = self._starts[row + 1] - 1
        else:
            end = self._length
        return start, end


__all__ = ["LineIndex"]
