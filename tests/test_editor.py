"""Tests for the owning editor."""

import asyncio

import pytest

from cvrender.collaborators import MemoryStore
from cvrender.editor import STORE_KEY, ResumeEditor
from cvrender.model import default_document
from cvrender.shared import InvalidImportError, StorageQuotaError
from cvrender.transforms import TextTransformAdapter, TransformResult


def _set_summary(document, value):
    document["personalInfo"]["summary"] = value
    return document


class TestEditorEdits:
    """Tests for edits and undo/redo through the editor."""

    def test_starts_blank(self):
        editor = ResumeEditor()
        assert editor.document == default_document()
        assert editor.can_undo() is False

    def test_edit_undo_redo(self):
        editor = ResumeEditor()
        editor.update_field("personalInfo", "fullName", "Ana")
        editor.add_entry("skills", {"name": "Go"})
        assert editor.document["skills"][0]["name"] == "Go"

        editor.undo()
        assert editor.document["skills"] == []
        assert editor.document["personalInfo"]["fullName"] == "Ana"
        assert editor.can_redo() is True

        editor.redo()
        assert editor.document["skills"][0]["name"] == "Go"
        assert len(editor.history) == 3

    def test_undo_does_not_grow_history(self):
        editor = ResumeEditor()
        editor.toggle_section("skills")
        editor.undo()
        editor.redo()
        editor.undo()
        assert len(editor.history) == 2

    def test_edit_after_undo_drops_redo(self):
        editor = ResumeEditor()
        editor.update_field("personalInfo", "fullName", "A")
        editor.undo()
        editor.update_field("personalInfo", "fullName", "B")
        assert editor.can_redo() is False
        assert editor.document["personalInfo"]["fullName"] == "B"

    def test_document_property_is_a_copy(self):
        editor = ResumeEditor()
        editor.document["personalInfo"]["fullName"] = "hacked"
        assert editor.document["personalInfo"]["fullName"] == ""

    def test_entry_operations(self):
        editor = ResumeEditor()
        editor.add_entry("interests", {"name": "b"})
        editor.add_entry("interests", {"name": "a"})
        editor.duplicate_entry("interests", 0)
        editor.move_entry("interests", 2, 0)
        editor.update_entry("interests", 1, {"name": "z"})
        editor.remove_entry("interests", 2)
        assert [i["name"] for i in editor.document["interests"]] == ["b", "z"]

    def test_import_payload(self, sample_document):
        editor = ResumeEditor(sample_document)
        editor.import_payload({"version": 1, "data": {"personalInfo": {"jobTitle": "CTO"}}})
        assert editor.document["personalInfo"]["jobTitle"] == "CTO"
        assert editor.document["personalInfo"]["fullName"] == "Ana Souza"
        with pytest.raises(InvalidImportError):
            editor.import_payload(["nope"])
        assert editor.document["personalInfo"]["jobTitle"] == "CTO"

    def test_reset_and_load_profile(self, sample_document):
        editor = ResumeEditor()
        editor.update_field("personalInfo", "fullName", "A")
        editor.load_profile(sample_document)
        assert editor.can_undo() is False
        assert editor.document["personalInfo"]["fullName"] == "Ana Souza"
        editor.reset()
        assert editor.document == default_document()

    def test_verify_and_render(self, sample_document):
        editor = ResumeEditor(sample_document, theme="ivy-league")
        assert editor.verify().ok is True
        assert editor.render().attrs["data-theme"] == "ivy-league"
        editor.set_theme("unknown")
        assert editor.render(mode="cover").attrs["data-mode"] == "cover"


class TestEditorStore:
    """Tests for persistence through the store."""

    def test_every_edit_is_saved(self):
        store = MemoryStore()
        editor = ResumeEditor(store=store)
        editor.update_field("personalInfo", "fullName", "Ana")
        assert store.get(STORE_KEY)["personalInfo"]["fullName"] == "Ana"
        editor.undo()
        assert store.get(STORE_KEY)["personalInfo"]["fullName"] == ""

    def test_loads_saved_document(self, sample_document):
        store = MemoryStore()
        store.set(STORE_KEY, sample_document)
        editor = ResumeEditor(store=store)
        assert editor.document["personalInfo"]["fullName"] == "Ana Souza"

    def test_quota_error_keeps_edit_in_memory(self):
        store = MemoryStore(quota_bytes=4096)
        editor = ResumeEditor(store=store)
        with pytest.raises(StorageQuotaError):
            editor.update_field("personalInfo", "summary", "x" * 10000)
        assert len(editor.document["personalInfo"]["summary"]) == 10000
        assert store.get(STORE_KEY) is None


class TestEditorOperations:
    """Tests for AI operation slots."""

    def test_latest_token_wins(self):
        editor = ResumeEditor()
        first = editor.begin_operation("summary")
        second = editor.begin_operation("summary")
        assert editor.apply_operation_result("summary", first, TransformResult("old"), _set_summary) is False
        assert editor.apply_operation_result("summary", second, TransformResult("new"), _set_summary) is True
        assert editor.document["personalInfo"]["summary"] == "new"

    def test_token_is_single_use(self):
        editor = ResumeEditor()
        token = editor.begin_operation("summary")
        assert editor.apply_operation_result("summary", token, TransformResult("a"), _set_summary) is True
        assert editor.apply_operation_result("summary", token, TransformResult("b"), _set_summary) is False

    def test_slots_are_independent(self):
        editor = ResumeEditor()
        summary = editor.begin_operation("summary")
        editor.begin_operation("skills")
        assert editor.is_current("summary", summary) is True

    def test_cancel(self):
        editor = ResumeEditor()
        token = editor.begin_operation("summary")
        editor.cancel_operation("summary")
        assert editor.apply_operation_result("summary", token, TransformResult("x"), _set_summary) is False

    def test_edit_after_request_discards_result(self):
        editor = ResumeEditor()
        token = editor.begin_operation("summary")
        editor.update_field("personalInfo", "summary", "user typed this")
        assert editor.is_current("summary", token) is False
        assert editor.apply_operation_result("summary", token, TransformResult("AI text"), _set_summary) is False
        assert editor.document["personalInfo"]["summary"] == "user typed this"

    def test_undo_after_request_discards_result(self):
        editor = ResumeEditor()
        editor.update_field("personalInfo", "summary", "first")
        token = editor.begin_operation("summary")
        editor.undo()
        assert editor.apply_operation_result("summary", token, TransformResult("AI text"), _set_summary) is False
        assert editor.document["personalInfo"]["summary"] == ""

    def test_failed_result_is_not_applied(self):
        editor = ResumeEditor()
        token = editor.begin_operation("summary")
        result = TransformResult("fallback", ok=False)
        assert editor.apply_operation_result("summary", token, result, _set_summary) is False
        assert editor.can_undo() is False

    def test_run_transform(self, fake_client):
        editor = ResumeEditor()
        adapter = TextTransformAdapter(client=fake_client(reply="Great engineer."))
        result, applied = editor.run_transform("summary", adapter, "summarize", {"job_title": "Dev"}, _set_summary)
        assert applied is True
        assert result.value == "Great engineer."
        assert editor.document["personalInfo"]["summary"] == "Great engineer."
        editor.undo()
        assert editor.document["personalInfo"]["summary"] == ""

    def test_arun_transform_unavailable(self, fake_client):
        editor = ResumeEditor()
        adapter = TextTransformAdapter(client=fake_client(available=False))
        result, applied = asyncio.run(
            editor.arun_transform("skills", adapter, "suggest-skills", {"job_title": "Dev"},
                                  lambda doc, value: doc))
        assert applied is False
        assert result.value == []
