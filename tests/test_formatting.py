"""Tests for the pure formatting helpers."""

import pytest

from cvrender.formatting import (
    DARK_TEXT,
    LIGHT_TEXT,
    SPAN_EM,
    SPAN_STRONG,
    SPAN_TEXT,
    contrast_color,
    count_words,
    format_date,
    format_date_range,
    is_dark,
    is_too_light,
    normalize_hex,
    parse_inline_markup,
    sanitize_image_source,
    sanitize_link,
    with_alpha,
)


class TestFormatDate:
    """Tests for format_date."""

    @pytest.mark.parametrize("fmt,expected", [
        ("MMM yyyy", "Mar 2021"),
        ("MM/yyyy", "03/2021"),
        ("yyyy", "2021"),
        ("full", "March 2021"),
    ])
    def test_year_month_in_each_format(self, fmt, expected):
        assert format_date("2021-03", fmt) == expected

    def test_full_month_name_is_localized(self):
        assert format_date("2021-03", "full", "pt-BR") == "Março 2021"

    def test_accepts_day_and_slash_forms(self):
        assert format_date("2021-03-15", "MM/yyyy") == "03/2021"
        assert format_date("3/2021", "MM/yyyy") == "03/2021"

    def test_bare_year_is_kept(self):
        assert format_date("2019", "full") == "2019"

    def test_free_text_is_capitalized(self):
        assert format_date("currently working") == "Currently working"

    def test_unparsable_value_returned_as_given(self):
        assert format_date("2021-13") == "2021-13"

    def test_empty_and_non_string(self):
        assert format_date("") == ""
        assert format_date(None) == ""

    def test_unknown_format_uses_short_month(self):
        assert format_date("2021-03", "bogus") == "Mar 2021"


class TestFormatDateRange:
    """Tests for format_date_range."""

    def test_closed_range(self):
        assert format_date_range("2018-01", "2021-02") == "Jan 2018 – Feb 2021"

    def test_current_ignores_stored_end(self):
        out = format_date_range("2021-03", "2023-05", current=True)
        assert out == "Mar 2021 – Present"
        assert "2023" not in out

    def test_present_marker_is_localized(self):
        assert format_date_range("2021-03", "", True, "MMM yyyy", "pt-BR").endswith("Atual")

    def test_one_sided_ranges(self):
        assert format_date_range("", "2020") == "2020"
        assert format_date_range("2020", "") == "2020"
        assert format_date_range("", "") == ""


class TestInlineMarkup:
    """Tests for parse_inline_markup."""

    def test_bullet_with_bold_and_italic(self):
        lines = list(parse_inline_markup("- **Bold** and *it*"))
        assert len(lines) == 1
        line = lines[0]
        assert line.bullet is True
        assert [(s.kind, s.text) for s in line.spans] == [
            (SPAN_STRONG, "Bold"),
            (SPAN_TEXT, " and "),
            (SPAN_EM, "it"),
        ]
        assert line.plain == "Bold and it"

    def test_bullet_markers(self):
        lines = list(parse_inline_markup("• one\n- two\nthree"))
        assert [line.bullet for line in lines] == [True, True, False]

    def test_blank_text_yields_nothing(self):
        assert not parse_inline_markup("   ")
        assert list(parse_inline_markup(None)) == []

    def test_view_is_restartable(self):
        lines = parse_inline_markup("a\n**b**")
        assert list(lines) == list(lines)

    def test_crlf_is_normalized(self):
        assert [line.plain for line in parse_inline_markup("a\r\nb")] == ["a", "b"]


class TestSanitizeLink:
    """Tests for link and image sanitization."""

    def test_bare_domain_gets_https(self):
        assert sanitize_link("linkedin.com/in/ana") == "https://linkedin.com/in/ana"

    def test_http_kept(self):
        assert sanitize_link("http://example.com/x") == "http://example.com/x"

    @pytest.mark.parametrize("value", [
        "javascript:alert(1)",
        "data:text/html,<script>alert(1)</script>",
        "vbscript:msgbox",
        "not a url",
        "",
        None,
    ])
    def test_unsafe_or_unusable_values_are_dropped(self, value):
        assert sanitize_link(value) == ""

    def test_email_becomes_mailto(self):
        assert sanitize_link("ana@example.com") == "mailto:ana@example.com"
        assert sanitize_link("mailto:ana@example.com") == "mailto:ana@example.com"

    def test_host_with_port_is_not_a_scheme(self):
        assert sanitize_link("localhost:8080") == "https://localhost:8080"

    def test_image_sources(self):
        assert sanitize_image_source("data:image/png;base64,AAAA") == "data:image/png;base64,AAAA"
        assert sanitize_image_source("https://cdn.example.com/me.jpg") == "https://cdn.example.com/me.jpg"
        assert sanitize_image_source("data:text/html;base64,AAAA") == ""
        assert sanitize_image_source("javascript:alert(1)") == ""
        assert sanitize_image_source("ana@example.com") == ""


class TestColors:
    """Tests for color helpers."""

    def test_contrast_color(self):
        assert contrast_color("#ffffff") == DARK_TEXT
        assert contrast_color("#000000") == LIGHT_TEXT
        assert contrast_color("#fff") == DARK_TEXT

    def test_unparsable_color_counts_as_dark(self):
        assert contrast_color("nope") == LIGHT_TEXT
        assert is_dark("nope") is True

    def test_is_too_light(self):
        assert is_too_light("#f8fafc") is True
        assert is_too_light("#1e293b") is False

    def test_normalize_and_alpha(self):
        assert normalize_hex("#ABC") == "#aabbcc"
        assert normalize_hex("red") is None
        assert with_alpha("#3B82F6", "1a") == "#3b82f61a"
        assert with_alpha("red", "1a") == "red"


class TestCountWords:
    """Tests for count_words."""

    def test_counts_visible_text(self):
        doc = {
            "personalInfo": {"fullName": "Ana Souza", "summary": "two words"},
            "skills": [{"name": "Python"}],
        }
        assert count_words(doc) == 5

    def test_tolerates_garbage(self):
        assert count_words({}) == 0
        assert count_words("x") == 0
        assert count_words({"experience": "x", "skills": [None, 3]}) == 0
