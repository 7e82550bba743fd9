"""Jinja2 rendering of the email digest.

Templates live in the ``jobalert.notifications.email_templates`` package
directory and are rendered with StrictUndefined so a missing context key
fails loudly instead of producing an empty field.
"""

from typing import Dict

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape

from jobalert.logging import get_logger

from .models import NotificationTemplateError

logger = get_logger(__name__, component="notification")


class TemplateRenderer:
    """Renders subject, HTML body and plain-text body for one digest."""

    def __init__(
        self,
        template_dir: str = "email_templates",
        subject_template: str = "digest_subject.j2",
        html_template: str = "digest_body.html.j2",
        text_template: str = "digest_body.txt.j2",
    ):
        self.subject_template_name = subject_template
        self.html_template_name = html_template
        self.text_template_name = text_template

        self.env = Environment(
            loader=PackageLoader("jobalert.notifications", template_dir),
            autoescape=select_autoescape(enabled_extensions=("html.j2",), default=False),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, context: Dict) -> Dict[str, str]:
        """Render all three templates.

        Returns:
            Dictionary with ``subject`` (single line), ``html_body`` and
            ``text_body``

        Raises:
            NotificationTemplateError: If any template fails to load or render
        """
        try:
            subject = (
                self.env.get_template(self.subject_template_name)
                .render(context)
                .strip()
                .replace("\n", " ")
            )
            html_body = self.env.get_template(self.html_template_name).render(context)
            text_body = self.env.get_template(self.text_template_name).render(context)
        except TemplateError as e:
            logger.error(f"Template rendering failed: {e}", exc_info=True)
            raise NotificationTemplateError(f"Template rendering failed: {e}") from e

        logger.debug(f"Rendered digest for {context.get('count', 0)} postings")
        return {"subject": subject, "html_body": html_body, "text_body": text_body}
