"""
Owning editor: the single place that holds the current document.

Every edit goes through ``commit``: the document is coalesced over the
blank template, recorded in the undo history and persisted through the
optional store. AI results are applied through per-slot tokens so only
the latest request for a slot can land.
"""

from __future__ import annotations

import copy
import itertools
from typing import Any, Callable, Dict, Optional, Tuple, Union

from . import model
from .document_io import import_payload as merge_import_payload
from .history import DEFAULT_HISTORY_LIMIT, EditHistory
from .logging_utils import LOG
from .rendering import MODE_RESUME, Node, render
from .shared import VerificationResult
from .themes import DEFAULT_THEME, Theme, resolve_theme
from .transforms import TextTransformAdapter, TransformResult
from .verification import verify_document

Document = Dict[str, Any]
ApplyResult = Callable[[Document, Any], Document]

STORE_KEY = "resume"


class ResumeEditor:
    """
    Holds the current document, its edit history and the active theme.

    Args:
        document: Initial document; when omitted the store's saved document
            (or the blank template) is used
        store: Optional key/value store the document is saved to after every edit
        history_limit: Maximum number of undo snapshots
    """

    def __init__(self, document: Optional[Document] = None, *, store: Any = None,
                 history_limit: int = DEFAULT_HISTORY_LIMIT, theme: Union[Theme, str, None] = None):
        self._store = store
        if document is None and store is not None:
            saved = store.get(STORE_KEY)
            if isinstance(saved, dict):
                document = saved
        self._document = model.normalize_document(document if isinstance(document, dict) else {})
        self._history = EditHistory(self._document, on_change=self._on_replay, limit=history_limit)
        self.theme = resolve_theme(theme) if theme is not None else DEFAULT_THEME
        self._tokens = itertools.count(1)
        self._slots: Dict[str, Tuple[int, int]] = {}
        self._edits = 0

    # ------------------------- State -------------------------

    @property
    def document(self) -> Document:
        return copy.deepcopy(self._document)

    @property
    def history(self) -> EditHistory:
        return self._history

    def set_theme(self, theme: Union[Theme, str, None]) -> Theme:
        self.theme = resolve_theme(theme)
        return self.theme

    def _persist(self) -> None:
        if self._store is not None:
            self._store.set(STORE_KEY, self._document)

    def _apply(self, document: Document) -> None:
        self._document = document
        self._edits += 1
        self._history.record(document)
        self._persist()

    def _on_replay(self, snapshot: Document) -> None:
        # record() is a pass-through while the history is replaying
        self._apply(snapshot)

    def commit(self, document: Document) -> Document:
        """
        Make document the current state.

        Raises:
            InvalidImportError: If document is not an object
            StorageQuotaError: If the store is full (the edit is kept in memory)
        """
        self._apply(model.merge_document(model.default_document(), document))
        return self.document

    # ------------------------- History -------------------------

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    def undo(self) -> Optional[Document]:
        return self._history.undo()

    def redo(self) -> Optional[Document]:
        return self._history.redo()

    def reset(self) -> Document:
        """Back to the blank template with a fresh history."""
        return self.load_profile(model.default_document())

    def load_profile(self, document: Document) -> Document:
        """Switch to another saved document; the history restarts from it."""
        self._document = model.normalize_document(document)
        self._history.reset(self._document)
        self._slots.clear()
        self._persist()
        return self.document

    def import_payload(self, payload: Any) -> Document:
        """
        Merge an imported (enveloped or bare) payload and commit it.

        Raises:
            InvalidImportError: The current document is left untouched
        """
        return self.commit(merge_import_payload(self._document, payload))

    # ------------------------- Edits -------------------------

    def add_entry(self, category: str, entry: Any = None) -> Document:
        return self.commit(model.add_entry(self._document, category, entry))

    def remove_entry(self, category: str, index: int) -> Document:
        return self.commit(model.remove_entry(self._document, category, index))

    def duplicate_entry(self, category: str, index: int) -> Document:
        return self.commit(model.duplicate_entry(self._document, category, index))

    def update_entry(self, category: str, index: int, changes: Dict[str, Any]) -> Document:
        return self.commit(model.update_entry(self._document, category, index, changes))

    def move_entry(self, category: str, from_index: int, to_index: int) -> Document:
        return self.commit(model.move_entry(self._document, category, from_index, to_index))

    def update_field(self, section: str, field: str, value: Any) -> Document:
        return self.commit(model.update_field(self._document, section, field, value))

    def toggle_section(self, key: str) -> Document:
        return self.commit(model.toggle_section(self._document, key))

    # ------------------------- Views -------------------------

    def verify(self) -> VerificationResult:
        return verify_document(self._document)

    def render(self, mode: str = MODE_RESUME, settings: Optional[Dict[str, Any]] = None) -> Node:
        return render(self._document, self.theme, settings, mode)

    # ------------------------- AI slots -------------------------

    def begin_operation(self, slot: str) -> int:
        """
        Start an operation for slot and return its token.

        A later call for the same slot supersedes the earlier token, and any
        edit committed before the result arrives invalidates it.
        """
        token = next(self._tokens)
        self._slots[slot] = (token, self._edits)
        return token

    def cancel_operation(self, slot: str) -> None:
        """Discard whatever result is still pending for slot."""
        self._slots.pop(slot, None)

    def is_current(self, slot: str, token: int) -> bool:
        pending = self._slots.get(slot)
        return pending is not None and pending == (token, self._edits)

    def apply_operation_result(self, slot: str, token: int, result: TransformResult, apply: ApplyResult) -> bool:
        """
        Apply a finished operation's value if its token is still the latest.

        A failed result leaves the document unchanged, and so does a result
        whose token was superseded or that arrives after a newer edit.

        Args:
            apply: Called with (current document, result value); returns the new document

        Returns:
            True when the result was committed
        """
        pending = self._slots.get(slot)
        if pending is None or pending[0] != token:
            LOG.debug("Discarding stale result for %s (token %s)", slot, token)
            return False
        del self._slots[slot]
        if pending[1] != self._edits:
            LOG.debug("Discarding result for %s: the document was edited after the request", slot)
            return False
        if not result.ok:
            LOG.debug("Not applying failed result for %s: %s", slot, result.message)
            return False
        self.commit(apply(self.document, result.value))
        return True

    def run_transform(self, slot: str, adapter: TextTransformAdapter, operation: str,
                      payload: Optional[Dict[str, Any]], apply: ApplyResult) -> Tuple[TransformResult, bool]:
        token = self.begin_operation(slot)
        result = adapter.transform(operation, payload)
        return result, self.apply_operation_result(slot, token, result, apply)

    async def arun_transform(self, slot: str, adapter: TextTransformAdapter, operation: str,
                             payload: Optional[Dict[str, Any]], apply: ApplyResult) -> Tuple[TransformResult, bool]:
        token = self.begin_operation(slot)
        result = await adapter.atransform(operation, payload)
        return result, self.apply_operation_result(slot, token, result, apply)
