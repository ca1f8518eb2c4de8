"""Tests for the theme registry."""

import logging

from cvrender.themes import (
    DEFAULT_THEME,
    LAYOUT_FAMILIES,
    THEMES,
    get_overrides,
    get_theme,
    list_themes,
    resolve_theme,
)


class TestThemeRegistry:
    """Tests for theme lookup."""

    def test_theme_ids_are_unique(self):
        ids = [theme.id for theme in THEMES]
        assert len(ids) == len(set(ids))

    def test_every_theme_uses_a_known_layout(self):
        for theme in THEMES:
            assert theme.layout in LAYOUT_FAMILIES

    def test_get_theme_by_id(self):
        assert get_theme("ivy-league").layout == "stacked"

    def test_unknown_id_falls_back_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="cvrender"):
            theme = get_theme("does-not-exist")
        assert theme is DEFAULT_THEME
        assert "UnresolvedTheme" in caplog.text

    def test_missing_id_falls_back(self):
        assert get_theme(None) is DEFAULT_THEME

    def test_resolve_theme_accepts_instance(self):
        theme = THEMES[3]
        assert resolve_theme(theme) is theme
        assert resolve_theme(theme.id) is theme

    def test_list_themes_sorted_with_descriptions(self):
        themes = list_themes()
        names = [t["name"] for t in themes]
        assert names == sorted(names)
        assert len(themes) == len(THEMES)
        assert all(t["description"] for t in themes)


class TestThemeOverrides:
    """Tests for per-theme visual overrides."""

    def test_named_overrides(self):
        assert get_overrides(get_theme("swiss-international")).section_title == "double-rule"
        assert get_overrides(get_theme("ivy-league")).section_title == "centered-serif"
        assert get_overrides(get_theme("timeline-pro")).timeline is True

    def test_other_themes_have_no_overrides(self):
        overrides = get_overrides(get_theme("modern-slate"))
        assert overrides.section_title is None
        assert overrides.timeline is False
