"""Unit tests for email template rendering.

Tests the TemplateRenderer for:
- HTML and text body rendering
- HTML auto-escaping (HTML templates only)
- Strict undefined variable detection
- Missing template handling
"""

import pytest
from markupsafe import Markup

from release_pipeline.rendering.models import TemplateRenderError
from release_pipeline.rendering.templates import TemplateRenderer


@pytest.fixture
def body_context():
    """Template context with every variable the body templates use."""
    return {
        "title": "Widget v2 & Fixtures",
        "url": "https://example.com/releases/v2",
        "business_impact": "Faster assembly",
        "technical_changes": "",
        "business_impact_html": Markup('<p class="paragraph">Faster assembly</p>'),
        "technical_changes_html": Markup(""),
        "file_list_html": Markup("No specific files included in this release."),
        "file_labels": [],
    }


@pytest.fixture
def renderer():
    return TemplateRenderer()


def test_html_body_escapes_plain_values(renderer, body_context):
    html = renderer.render_html_body(body_context)
    assert "Widget v2 &amp; Fixtures" in html


def test_html_body_keeps_markup_values(renderer, body_context):
    html = renderer.render_html_body(body_context)
    assert '<p class="paragraph">Faster assembly</p>' in html


def test_html_body_skips_empty_section(renderer, body_context):
    html = renderer.render_html_body(body_context)
    assert "What's New" in html
    assert "Technical Changes" not in html


def test_text_body_is_not_escaped(renderer, body_context):
    text = renderer.render_text_body(body_context)
    assert "Widget v2 & Fixtures" in text
    assert "&amp;" not in text
    assert "No specific files included in this release." in text


def test_document_render(renderer):
    document = renderer.render_document(
        {
            "subject": "Subject <1>",
            "body_html": Markup("<div>Body</div>"),
            "tag": "v1.0.0",
            "company_name": "Example Engineering",
        }
    )
    assert "<h1>Subject &lt;1&gt;</h1>" in document
    assert "<div>Body</div>" in document
    assert "Reference: v1.0.0" in document


def test_missing_variable_raises(renderer, body_context):
    del body_context["url"]
    with pytest.raises(TemplateRenderError, match="email_body.html.j2"):
        renderer.render_html_body(body_context)


def test_missing_template_raises():
    renderer = TemplateRenderer(html_template="does_not_exist.html.j2")
    with pytest.raises(TemplateRenderError):
        renderer.render_html_body({})
