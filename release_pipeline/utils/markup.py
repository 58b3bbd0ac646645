"""Markdown and HTML helpers for notification content.

This module converts release-note markdown into email-ready HTML with CSS
class hooks, and turns HTML back into compact plain text for the Jira
comment.
"""

import re

import markdown
from bs4 import BeautifulSoup

MARKDOWN_EXTENSIONS = ["fenced_code", "nl2br", "sane_lists"]

# Element name -> class injected for the email stylesheet
CLASS_HOOKS = {
    "h1": "section-header",
    "h2": "section-header",
    "h3": "section-header",
    "h4": "section-header",
    "h5": "section-header",
    "h6": "section-header",
    "p": "paragraph",
    "ul": "list",
    "ol": "list",
    "li": "list-item",
    "blockquote": "quote",
}

LIST_ITEM_LINE = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+\S")


def _separate_lists(text: str) -> str:
    """Insert a blank line before a list that directly follows a paragraph.

    Release notes are usually written GitHub-style where a list may start on
    the line right after a sentence; Python-Markdown needs a blank line there.
    """
    lines = text.split("\n")
    out = []
    in_fence = False
    for line in lines:
        if line.lstrip().startswith("```"):
            in_fence = not in_fence
        if (
            not in_fence
            and out
            and out[-1].strip()
            and LIST_ITEM_LINE.match(line)
            and not LIST_ITEM_LINE.match(out[-1])
        ):
            out.append("")
        out.append(line)
    return "\n".join(out)


def _add_class(tag, css_class: str) -> None:
    classes = tag.get("class", [])
    if css_class not in classes:
        tag["class"] = [*classes, css_class]


def convert_markdown_to_html(text: str) -> str:
    """Convert markdown to HTML with class hooks for the email template.

    Headings, paragraphs, lists, list items and blockquotes get a CSS class.
    Fenced code blocks become ``<pre class="code-block"><code>`` and inline
    code becomes ``<span class="inline-code">``.

    Args:
        text: Markdown (or plain) text

    Returns:
        HTML fragment; empty string for blank input

    Example:
        >>> convert_markdown_to_html("Faster assembly")
        '<p class="paragraph">Faster assembly</p>'
    """
    if not text or not text.strip():
        return ""

    html = markdown.markdown(_separate_lists(text), extensions=MARKDOWN_EXTENSIONS)
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.find_all(list(CLASS_HOOKS)):
        _add_class(tag, CLASS_HOOKS[tag.name])

    for pre in soup.find_all("pre"):
        code = pre.find("code")
        block = soup.new_tag("pre", attrs={"class": "code-block"})
        inner = soup.new_tag("code")
        inner.string = (code or pre).get_text()
        block.append(inner)
        pre.replace_with(block)

    for code in soup.find_all("code"):
        if code.find_parent("pre") is not None:
            continue
        span = soup.new_tag("span", attrs={"class": "inline-code"})
        span.string = code.get_text()
        code.replace_with(span)

    return str(soup).strip()


def html_to_text(html: str) -> str:
    """Strip tags and collapse whitespace into a single line of text.

    Example:
        >>> html_to_text('<ul class="list">\\n<li>One</li>\\n<li>Two</li>\\n</ul>')
        'One Two'
    """
    if not html:
        return ""
    text = BeautifulSoup(html, "html.parser").get_text()
    return " ".join(text.split())


def truncate_text(text: str, max_length: int = 50, suffix: str = "...") -> str:
    """Cut text longer than max_length to max_length - len(suffix) plus suffix.

    Example:
        >>> truncate_text("x" * 60)
        'xxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx...'
    """
    if not text or len(text) <= max_length:
        return text
    return text[: max_length - len(suffix)] + suffix
