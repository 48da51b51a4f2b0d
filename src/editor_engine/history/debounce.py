"""Cancel-and-restart timer deciding when an edit burst is offered to history."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from .state import EditorState


@dataclass
class PendingCheckpoint:
    deadline: float
    state: EditorState
    generation: int


class CheckpointScheduler:
    """Polled debounce: only the last state of a burst survives the quiet period.

    The host calls ``poll`` from its own timer (the Textual adapter uses
    ``set_interval``); nothing here spawns threads.
    """

    def __init__(
        self,
        delay_ms: int = 500,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if delay_ms < 0:
            raise ValueError("debounce delay cannot be negative")
        self.delay_ms = delay_ms
        self._clock = clock
        self._pending: Optional[PendingCheckpoint] = None
        self._generation = 0

    @property
    def armed(self) -> bool:
        return self._pending is not None

    @property
    def armed_state(self) -> Optional[EditorState]:
        return self._pending.state if self._pending else None

    @property
    def generation(self) -> int:
        return self._generation

    def schedule(self, state: EditorState) -> int:
        """Replace any armed timer with one for ``state``; returns its generation."""

        self._generation += 1
        self._pending = PendingCheckpoint(
            deadline=self._clock() + self.delay_ms / 1000.0,
            state=state,
            generation=self._generation,
        )
        return self._generation

    def cancel(self) -> None:
        self._pending = None

    def poll(self, now: Optional[float] = None) -> Optional[EditorState]:
        """Return the armed state once its deadline has passed, disarming it."""

        pending = self._pending
        if pending is None:
            return None
        current = self._clock() if now is None else now
        if pending.deadline > current:
            return None
        self._pending = None
        return pending.state

    def flush(self) -> Optional[EditorState]:
        """Disarm immediately and hand back whatever was waiting."""

        pending, self._pending = self._pending, None
        return pending.state if pending else None


__all__ = ["CheckpointScheduler", "PendingCheckpoint"]
