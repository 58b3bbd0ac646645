"""Utility functions for markup conversion and time handling."""

from .markup import convert_markdown_to_html, html_to_text, truncate_text
from .timestamps import format_timestamp, utc_now

__all__ = [
    # Markup
    "convert_markdown_to_html",
    "html_to_text",
    "truncate_text",
    # Timestamps
    "utc_now",
    "format_timestamp",
]
