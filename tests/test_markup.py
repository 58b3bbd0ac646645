"""Unit tests for markdown conversion and text helpers."""

import pytest

from release_pipeline.utils.markup import convert_markdown_to_html, html_to_text, truncate_text


class TestConvertMarkdownToHtml:
    def test_plain_text_becomes_paragraph(self):
        assert convert_markdown_to_html("Faster assembly") == '<p class="paragraph">Faster assembly</p>'

    @pytest.mark.parametrize("text", ["", "   ", "\n\n", None])
    def test_blank_input(self, text):
        assert convert_markdown_to_html(text) == ""

    def test_heading_class(self):
        assert convert_markdown_to_html("# Overview") == '<h1 class="section-header">Overview</h1>'

    def test_list_classes(self):
        html = convert_markdown_to_html("- One\n- Two")
        assert '<ul class="list">' in html
        assert '<li class="list-item">One</li>' in html
        assert '<li class="list-item">Two</li>' in html

    def test_ordered_list_class(self):
        html = convert_markdown_to_html("1. First\n2. Second")
        assert '<ol class="list">' in html

    def test_list_directly_after_paragraph(self):
        html = convert_markdown_to_html("Changes:\n- One\n- Two")
        assert '<p class="paragraph">Changes:</p>' in html
        assert '<li class="list-item">One</li>' in html

    def test_blockquote_class(self):
        html = convert_markdown_to_html("> Note this")
        assert '<blockquote class="quote">' in html

    def test_inline_code(self):
        html = convert_markdown_to_html("Use `quick-release` clamps")
        assert html == (
            '<p class="paragraph">Use <span class="inline-code">quick-release</span> clamps</p>'
        )
        assert "<code>" not in html

    def test_fenced_code_block(self):
        html = convert_markdown_to_html("```\ntorque = 12\n```")
        assert html.startswith('<pre class="code-block"><code>torque = 12')
        assert "inline-code" not in html

    def test_line_breaks_preserved(self):
        html = convert_markdown_to_html("line one\nline two")
        assert "<br" in html
        assert "line two" in html


class TestHtmlToText:
    def test_strips_tags_and_collapses_whitespace(self):
        html = '<ul class="list">\n<li>One</li>\n<li>Two</li>\n</ul>'
        assert html_to_text(html) == "One Two"

    def test_empty(self):
        assert html_to_text("") == ""

    def test_round_trip_paragraph(self):
        assert html_to_text(convert_markdown_to_html("Faster   assembly")) == "Faster assembly"


class TestTruncateText:
    def test_short_text_unchanged(self):
        assert truncate_text("Widget v2") == "Widget v2"

    def test_exact_limit_unchanged(self):
        assert truncate_text("x" * 50) == "x" * 50

    def test_long_text_truncated(self):
        result = truncate_text("x" * 60)
        assert result == "x" * 47 + "..."
        assert len(result) == 50
