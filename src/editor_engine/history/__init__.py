"""Editor snapshots, undo/redo history and debounced checkpointing."""

from .debounce import CheckpointScheduler, PendingCheckpoint
from .manager import HistoryManager
from .state import EditorState, Selection

__all__ = [
    "CheckpointScheduler",
    "EditorState",
    "HistoryManager",
    "PendingCheckpoint",
    "Selection",
]
