"""Template rendering for customer email content using Jinja2.

This module wraps Jinja2 template rendering with strict undefined checking
so that a template referencing a variable the renderer does not supply fails
loudly instead of producing a silently blank email.
"""

import logging
from typing import Any, Dict

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape

from .models import TemplateRenderError

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """Renders email templates from the release_pipeline.rendering package.

    HTML templates are auto-escaped; plain-text templates are not. Callers
    mark pre-rendered HTML fragments safe with ``markupsafe.Markup``.
    Templates are cached by the Jinja2 environment after the first load.
    """

    def __init__(
        self,
        template_dir: str = "email_templates",
        html_template: str = "email_body.html.j2",
        text_template: str = "email_body.txt.j2",
        document_template: str = "email_document.html.j2",
    ):
        """Initialize template renderer with Jinja2 environment.

        Args:
            template_dir: Directory name within the release_pipeline.rendering package
            html_template: Filename of the HTML body template
            text_template: Filename of the plain-text body template
            document_template: Filename of the full HTML email document template
        """
        self.html_template_name = html_template
        self.text_template_name = text_template
        self.document_template_name = document_template

        self.env = Environment(
            loader=PackageLoader("release_pipeline.rendering", template_dir),
            autoescape=select_autoescape(enabled_extensions=("html", "html.j2")),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
        )

        logger.debug(f"Initialized TemplateRenderer with templates from {template_dir}")

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render one template with the provided context.

        Raises:
            TemplateRenderError: If the template is missing or rendering fails
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(context)
        except TemplateError as e:
            error_msg = f"Template rendering failed for {template_name}: {e}"
            logger.error(error_msg, exc_info=True)
            raise TemplateRenderError(error_msg) from e

    def render_html_body(self, context: Dict[str, Any]) -> str:
        return self.render_template(self.html_template_name, context).strip()

    def render_text_body(self, context: Dict[str, Any]) -> str:
        return self.render_template(self.text_template_name, context).strip()

    def render_document(self, context: Dict[str, Any]) -> str:
        return self.render_template(self.document_template_name, context).strip()
