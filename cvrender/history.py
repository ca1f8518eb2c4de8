"""
Bounded undo/redo history over full-document snapshots.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Optional

Document = Dict[str, Any]

DEFAULT_HISTORY_LIMIT = 50


class EditHistory:
    """
    Linear undo/redo stack with a sliding window of snapshots.

    ``record`` truncates any redoable states, appends the new snapshot and
    drops the oldest one once the window exceeds ``limit``. ``undo`` and
    ``redo`` move the cursor and notify the owner through ``on_change``.
    While the owner is being notified the history is "replaying": a
    ``record`` issued from inside the notification is passed through
    without touching the buffer, so a replayed state is never appended
    as a fresh edit.
    """

    def __init__(
        self,
        initial: Document,
        on_change: Optional[Callable[[Document], None]] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self._limit = limit
        self._on_change = on_change
        self._snapshots: List[Document] = [copy.deepcopy(initial)]
        self._index = 0
        self._replaying = False

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def index(self) -> int:
        return self._index

    @property
    def replaying(self) -> bool:
        return self._replaying

    @property
    def current(self) -> Document:
        return copy.deepcopy(self._snapshots[self._index])

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._snapshots) - 1

    def record(self, document: Document) -> Document:
        """
        Record a new snapshot and return it.

        During a replay the value is returned as-is and the buffer is left
        alone.
        """
        if self._replaying:
            return document

        del self._snapshots[self._index + 1:]
        self._snapshots.append(copy.deepcopy(document))
        if len(self._snapshots) > self._limit:
            self._snapshots.pop(0)
        self._index = len(self._snapshots) - 1
        return document

    def undo(self) -> Optional[Document]:
        if not self.can_undo():
            return None
        self._index -= 1
        return self._replay()

    def redo(self) -> Optional[Document]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._replay()

    def reset(self, document: Document) -> None:
        """Discard every snapshot and reseed with document as the sole entry."""
        self._snapshots = [copy.deepcopy(document)]
        self._index = 0
        self._replaying = False

    def _replay(self) -> Document:
        snapshot = copy.deepcopy(self._snapshots[self._index])
        self._replaying = True
        try:
            if self._on_change is not None:
                self._on_change(snapshot)
        finally:
            self._replaying = False
        return snapshot
