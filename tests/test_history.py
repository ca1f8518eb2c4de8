"""Tests for the bounded undo/redo history."""

import pytest

from cvrender.history import DEFAULT_HISTORY_LIMIT, EditHistory


def _doc(n):
    return {"n": n}


class TestEditHistory:
    """Tests for EditHistory."""

    def test_starts_with_initial_snapshot(self):
        history = EditHistory(_doc(0))
        assert len(history) == 1
        assert history.can_undo() is False
        assert history.can_redo() is False
        assert history.undo() is None
        assert history.redo() is None

    def test_undo_redo_walk(self):
        history = EditHistory(_doc(0))
        history.record(_doc(1))
        history.record(_doc(2))
        assert history.undo() == _doc(1)
        assert history.undo() == _doc(0)
        assert history.can_undo() is False
        assert history.redo() == _doc(1)
        assert history.current == _doc(1)

    def test_record_after_undo_discards_redo_branch(self):
        history = EditHistory(_doc(0))
        history.record(_doc(1))
        history.record(_doc(2))
        history.undo()
        history.record(_doc(3))
        assert history.can_redo() is False
        assert history.undo() == _doc(1)
        assert len(history) == 3

    def test_window_is_capped(self):
        history = EditHistory(_doc(0))
        for n in range(1, 80):
            history.record(_doc(n))
        assert len(history) == DEFAULT_HISTORY_LIMIT
        while history.can_undo():
            oldest = history.undo()
        assert oldest == _doc(79 - DEFAULT_HISTORY_LIMIT + 1)

    def test_custom_limit(self):
        history = EditHistory(_doc(0), limit=3)
        for n in range(1, 10):
            history.record(_doc(n))
        assert len(history) == 3
        with pytest.raises(ValueError):
            EditHistory(_doc(0), limit=0)

    def test_snapshots_are_copies(self):
        doc = {"items": [1]}
        history = EditHistory(_doc(0))
        history.record(doc)
        doc["items"].append(2)
        history.undo()
        assert history.redo() == {"items": [1]}

    def test_record_during_replay_is_pass_through(self):
        seen = []
        history = None

        def on_change(snapshot):
            seen.append(snapshot)
            assert history.replaying is True
            history.record(snapshot)

        history = EditHistory(_doc(0), on_change=on_change)
        history.record(_doc(1))
        history.undo()
        assert seen == [_doc(0)]
        assert len(history) == 2
        assert history.can_redo() is True
        assert history.replaying is False

    def test_reset(self):
        history = EditHistory(_doc(0))
        history.record(_doc(1))
        history.reset(_doc(9))
        assert len(history) == 1
        assert history.current == _doc(9)
        assert history.can_undo() is False
