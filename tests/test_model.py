"""Tests for the document model and the import merger."""

import pytest

from cvrender import model
from cvrender.model import LIST_FIELDS, default_document, merge_document, normalize_document
from cvrender.shared import InvalidImportError


class TestDefaultDocument:
    """Tests for the blank template."""

    def test_every_list_field_is_empty_list(self):
        doc = default_document()
        for field in LIST_FIELDS:
            assert doc[field] == []

    def test_returns_independent_copies(self):
        a = default_document()
        a["settings"]["sectionOrder"].append("x")
        a["experience"].append({})
        b = default_document()
        assert "x" not in b["settings"]["sectionOrder"]
        assert b["experience"] == []


class TestMergeDocument:
    """Tests for merge_document."""

    def test_partial_personal_info_keeps_other_defaults(self):
        merged = merge_document(default_document(), {"personalInfo": {"fullName": "X"}})
        assert merged["personalInfo"]["fullName"] == "X"
        assert merged["personalInfo"]["email"] == ""
        assert merged["experience"] == []

    def test_lists_replace_whole(self):
        base = merge_document(default_document(), {"skills": [{"id": "1", "name": "Go"}]})
        merged = merge_document(base, {"skills": []})
        assert merged["skills"] == []

    def test_missing_list_kept_from_base(self):
        base = merge_document(default_document(), {"skills": [{"id": "1", "name": "Go"}]})
        merged = merge_document(base, {"profileName": "B"})
        assert merged["skills"] == [{"id": "1", "name": "Go"}]
        assert merged["profileName"] == "B"

    def test_null_list_kept_from_base(self):
        base = merge_document(default_document(), {"languages": ["en"]})
        assert merge_document(base, {"languages": None})["languages"] == ["en"]

    def test_is_idempotent(self, sample_document):
        once = merge_document(default_document(), sample_document)
        twice = merge_document(once, sample_document)
        assert once == twice

    def test_does_not_mutate_inputs(self):
        base = default_document()
        imported = {"personalInfo": {"fullName": "X"}, "skills": [{"name": "Go"}]}
        merge_document(base, imported)
        assert base["personalInfo"]["fullName"] == ""
        assert imported == {"personalInfo": {"fullName": "X"}, "skills": [{"name": "Go"}]}

    def test_non_object_section_is_ignored(self):
        merged = merge_document(default_document(), {"settings": "nope"})
        assert merged["settings"]["paperSize"] == "a4"

    @pytest.mark.parametrize("payload", [None, [], "text", 3])
    def test_rejects_non_objects(self, payload):
        with pytest.raises(InvalidImportError):
            merge_document(default_document(), payload)

    def test_normalize_fills_missing_lists(self):
        doc = normalize_document({"experience": "oops"})
        assert doc["experience"] == []
        assert doc["customSections"] == []


class TestEntryOperations:
    """Tests for entry operations."""

    def test_add_entry_prepends_blank_entry_with_id(self):
        doc = model.add_entry(default_document(), "experience")
        doc = model.add_entry(doc, "experience", {"role": "Second"})
        assert doc["experience"][0]["role"] == "Second"
        assert doc["experience"][0]["id"]
        assert doc["experience"][1]["id"] != doc["experience"][0]["id"]
        assert doc["experience"][1]["current"] is False

    def test_custom_category_maps_to_custom_sections(self):
        doc = model.add_entry(default_document(), "custom")
        assert doc["customSections"][0]["items"] == []

    def test_languages_have_no_entry_template(self):
        with pytest.raises(ValueError):
            model.new_entry("languages")

    def test_unknown_category(self):
        with pytest.raises(ValueError):
            model.add_entry(default_document(), "hobbies")

    def test_duplicate_gets_fresh_id(self):
        doc = model.add_entry(default_document(), "skills", {"id": "a", "name": "Go"})
        doc = model.duplicate_entry(doc, "skills", 0)
        assert [s["name"] for s in doc["skills"]] == ["Go", "Go"]
        assert doc["skills"][1]["id"] != "a"

    def test_update_entry_keeps_id(self):
        doc = model.add_entry(default_document(), "skills", {"id": "a", "name": "Go"})
        doc = model.update_entry(doc, "skills", 0, {"name": "Rust", "id": "zzz"})
        assert doc["skills"][0] == {"id": "a", "name": "Rust"}

    def test_move_and_remove(self):
        doc = default_document()
        for name in ("c", "b", "a"):
            doc = model.add_entry(doc, "interests", {"name": name})
        doc = model.move_entry(doc, "interests", 0, 2)
        assert [i["name"] for i in doc["interests"]] == ["b", "c", "a"]
        unchanged = model.move_entry(doc, "interests", 0, 9)
        assert unchanged["interests"] == doc["interests"]
        doc = model.remove_entry(doc, "interests", 1)
        assert [i["name"] for i in doc["interests"]] == ["b", "a"]

    def test_operations_do_not_mutate(self):
        doc = default_document()
        model.add_entry(doc, "skills")
        assert doc["skills"] == []

    def test_update_field_and_toggle_section(self):
        doc = model.update_field(default_document(), "personalInfo", "fullName", "Ana")
        assert doc["personalInfo"]["fullName"] == "Ana"
        doc = model.toggle_section(doc, "skills")
        assert doc["settings"]["visibleSections"]["skills"] is False
        doc = model.toggle_section(doc, "skills")
        assert doc["settings"]["visibleSections"]["skills"] is True

    def test_update_field_rejects_list_sections(self):
        with pytest.raises(ValueError):
            model.update_field(default_document(), "skills", "x", 1)
