"""Tests for markdown rendering (F2)."""

import pytest

from academy.core.markdown_renderer import (
    extract_excerpt,
    normalize_language,
    render_markdown,
    section_class_for,
)


class TestHeadings:
    """Tests for heading ids, classes and anchors."""

    def test_h1_gets_id_anchor_and_section_class(self):
        html = render_markdown("# Core Concepts\n\nText.").html
        assert 'id="core-concepts"' in html
        assert 'class="heading-1 section-concepts"' in html
        assert 'class="anchor-link"' in html
        assert 'href="#core-concepts"' in html

    def test_h1_without_keyword(self):
        html = render_markdown("# Overview\n").html
        assert 'class="heading-1"' in html

    def test_lower_levels_get_level_class_only(self):
        html = render_markdown("## Exam Tips\n").html
        assert 'class="heading-2"' in html
        assert "section-exam" not in html

    def test_punctuation_dropped_from_id(self):
        html = render_markdown("## What's new?\n").html
        assert 'id="whats-new"' in html


class TestSectionClassFor:
    """Tests for section_class_for function."""

    @pytest.mark.parametrize(
        "heading, expected",
        [
            ("Core Concepts", "section-concepts"),
            ("Code Examples", "section-code"),
            ("Common Gotchas", "section-gotchas"),
            ("Exam Tips", "section-exam"),
            ("Practice Exercises", "section-practice"),
            ("Type Conversion", "section-conversion"),
            ("Casting Rules", "section-conversion"),
            ("Constants", "section-constants"),
            ("Related Topics", "section-related"),
            ("Introduction", ""),
        ],
    )
    def test_keywords(self, heading, expected):
        assert section_class_for(heading) == expected

    def test_first_keyword_wins(self):
        assert section_class_for("Core Concepts for the Exam") == "section-concepts"


class TestCodeBlocks:
    """Tests for fenced code language classes."""

    @pytest.mark.parametrize(
        "language, expected",
        [
            ("js", "javascript"),
            ("TS", "typescript"),
            ("html", "markup"),
            ("xml", "markup"),
            ("cls", "apex"),
            ("apex", "apex"),
            ("soql", "soql"),
            ("", "text"),
            ("c#", "text"),
        ],
    )
    def test_normalize_language(self, language, expected):
        assert normalize_language(language) == expected

    def test_alias_applied_to_fence(self):
        html = render_markdown("```js\nlet a = 1;\n```\n").html
        assert 'class="language-javascript"' in html

    def test_fence_without_language(self):
        html = render_markdown("```\nplain\n```\n").html
        assert 'class="language-text"' in html

    def test_code_is_escaped(self):
        html = render_markdown("```html\n<template></template>\n```\n").html
        assert "&lt;template&gt;" in html
        assert 'class="language-markup"' in html


class TestCallouts:
    """Tests for emoji blockquote callouts."""

    def test_tip(self):
        html = render_markdown("> 💡 TIP: Use scratch orgs.\n").html
        assert 'class="callout callout-tip"' in html
        assert 'data-icon="💡"' in html
        assert '<h5 class="callout-title">Tip</h5>' in html
        assert "<p>Use scratch orgs.</p>" in html
        assert "<blockquote>" not in html

    @pytest.mark.parametrize("marker", ["EXAM-TRAP", "EXAM_TRAP", "exam-trap"])
    def test_exam_trap_spellings(self, marker):
        html = render_markdown(f"> 🎯 {marker}: Read carefully.\n").html
        assert 'class="callout callout-exam-trap"' in html
        assert ">Exam Trap</h5>" in html

    def test_plain_blockquote_untouched(self):
        html = render_markdown("> Just a quote.\n").html
        assert "<blockquote>" in html
        assert "callout" not in html

    def test_callout_title_not_in_toc(self):
        rendered = render_markdown("## Setup\n\n> ⚠️ WARNING: Careful.\n")
        assert [item.title for item in rendered.table_of_contents] == ["Setup"]


class TestTables:
    """Tests for table wrapping."""

    def test_wrapped(self):
        html = render_markdown("| A | B |\n| --- | --- |\n| 1 | 2 |\n").html
        assert '<div class="table-wrapper">' in html
        assert '<table class="content-table">' in html
        assert html.index("table-wrapper") < html.index("<table")


class TestTableOfContents:
    """Tests for the flattened table of contents."""

    def test_document_order_with_levels(self):
        rendered = render_markdown("# One\n\n## Two\n\n### Three\n\n## Four\n")
        assert [(i.id, i.level) for i in rendered.table_of_contents] == [
            ("one", 1),
            ("two", 2),
            ("three", 3),
            ("four", 2),
        ]

    def test_titles_are_unescaped(self):
        rendered = render_markdown("## Maps & Sets\n")
        assert rendered.table_of_contents[0].title == "Maps & Sets"

    def test_no_headings(self):
        assert render_markdown("Just text.").table_of_contents == []

    def test_renders_are_independent(self):
        """Ids don't carry over between calls."""
        first = render_markdown("## Setup\n")
        second = render_markdown("## Setup\n")
        assert first.table_of_contents[0].id == second.table_of_contents[0].id == "setup"


class TestExtractExcerpt:
    """Tests for extract_excerpt function."""

    def test_strips_markdown(self):
        text = "# Title\n\nSome **bold** and `code` with a [link](https://example.com)."
        assert extract_excerpt(text) == "Title Some bold and code with a link."

    def test_short_text_unchanged(self):
        assert extract_excerpt("Short.") == "Short."

    def test_cuts_at_word_boundary(self):
        result = extract_excerpt("word " * 100)
        assert result == " ".join(["word"] * 32) + "..."

    def test_hard_cut_without_late_space(self):
        assert extract_excerpt("x" * 200) == "x" * 160 + "..."

    def test_custom_length(self):
        assert extract_excerpt("abcdefghij", max_length=5) == "abcde..."
