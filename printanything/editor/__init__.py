"""Editor state - undo/redo history and the live editing session."""

from printanything.editor.history import HistoryManager
from printanything.editor.session import EditingSession, RecentNames

__all__ = [
    "EditingSession",
    "HistoryManager",
    "RecentNames",
]
