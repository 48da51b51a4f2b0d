"""Immutable editor snapshots exchanged with the host."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Tuple

Selection = Tuple[int, int]  # (start, end) offsets into ``text``


@dataclass(frozen=True, slots=True)
class EditorState:
    """Text plus selection at one instant; ``timestamp`` is monotonic seconds."""

    text: str = ""
    selection: Selection = (0, 0)
    timestamp: float = field(default_factory=time.monotonic)

    def __post_init__(self) -> None:
        start, end = self.selection
        if start > end:
            object.__setattr__(self, "selection", (end, start))

    @property
    def newline_count(self) -> int:
        return self.text.count("\n")

    def same_content(self, other: "EditorState") -> bool:
        """Equal text and selection, ignoring the timestamp."""

        return self.text == other.text and self.selection == other.selection

    def with_selection(self, start: int, end: int | None = None) -> "EditorState":
        return replace(self, selection=(start, start if end is None else end))


__all__ = ["EditorState", "Selection"]
