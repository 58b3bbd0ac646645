"""Rendering of customer email and Jira comment content."""

from .models import RenderedContent, RenderingError, TemplateRenderError
from .renderer import ContentRenderer
from .templates import TemplateRenderer

__all__ = [
    "ContentRenderer",
    "TemplateRenderer",
    "RenderedContent",
    "RenderingError",
    "TemplateRenderError",
]
