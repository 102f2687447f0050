"""Undo/redo history for the field collection.

A linear, bounded stack of snapshots. Recording after an undo discards
the redo branch; once the stack exceeds its limit the oldest snapshots
are dropped.
"""

import logging

from core import Field
from printanything.config import get_history_limit

logger = logging.getLogger(__name__)

Snapshot = tuple[Field, ...]


class HistoryManager:
    """Bounded linear undo/redo over field collection snapshots.

    The snapshot at the current index is always the live collection after
    record/undo/redo. The manager records exactly what it is given; callers
    decide which states are worth recording (e.g. only the end of a drag).

    Usage:
        history = HistoryManager(template.fields)
        history.record(new_fields)
        previous = history.undo()
        if previous is not None:
            fields = previous
    """

    def __init__(self, initial: Snapshot = (), limit: int | None = None):
        self._limit = limit if limit is not None else get_history_limit()
        if self._limit < 1:
            raise ValueError(f"History limit must be at least 1, got {self._limit}")
        self._snapshots: list[Snapshot] = [tuple(initial)]
        self._index = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Snapshot:
        return self._snapshots[self._index]

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    def __len__(self) -> int:
        return len(self._snapshots)

    def record(self, snapshot: Snapshot) -> None:
        """Push a snapshot, discarding any redo branch."""
        discarded = len(self._snapshots) - 1 - self._index
        if discarded:
            logger.debug(f"[HISTORY] Discarding {discarded} redo snapshot(s)")
        del self._snapshots[self._index + 1 :]
        self._snapshots.append(tuple(snapshot))

        overflow = len(self._snapshots) - self._limit
        if overflow > 0:
            del self._snapshots[:overflow]
        self._index = len(self._snapshots) - 1

    def undo(self) -> Snapshot | None:
        """Step back; returns the restored snapshot or None at the oldest entry."""
        if not self.can_undo:
            return None
        self._index -= 1
        return self._snapshots[self._index]

    def redo(self) -> Snapshot | None:
        """Step forward; returns the restored snapshot or None at the newest entry."""
        if not self.can_redo:
            return None
        self._index += 1
        return self._snapshots[self._index]

    def replace_current(self, snapshot: Snapshot) -> None:
        """Overwrite the snapshot at the current index without moving it.

        Used when the live collection is re-resolved (new bindings or date)
        so the current entry keeps matching it.
        """
        self._snapshots[self._index] = tuple(snapshot)

    def reset(self, snapshot: Snapshot = ()) -> None:
        """Forget everything and start over from a single snapshot."""
        self._snapshots = [tuple(snapshot)]
        self._index = 0
