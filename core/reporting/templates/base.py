"""
ReportForge Reporting - Base Template Engine

Provides Jinja2 template rendering with a built-in fallback template.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from core.reporting.errors import RenderError
from core.reporting.templates.context import ReportContext, format_currency
from core.reporting.templates.default import DEFAULT_TEMPLATE

logger = logging.getLogger(__name__)

_TEMPLATE_NAME = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

DEFAULT_TEMPLATE_NAME = "<default>"


@dataclass
class RenderResult:
    """
    Outcome of rendering one template.

    ``html`` is None only when ``error`` is set and no fallback was applied.
    """

    html: Optional[str]
    template_name: str
    error: Optional[RenderError] = None
    used_fallback: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class ReportTemplateEngine:
    """
    Template engine for generating HTML reports.

    Named templates live in ``template_dir`` as ``<report_type>.html``.
    Any report type without a usable template is rendered with the
    built-in default, so ``render`` always yields a complete document.

    Security: Autoescape is enabled for HTML and XML to prevent XSS.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing HTML templates.
                         Defaults to the html subdirectory of this package.
        """
        self.template_dir = template_dir or Path(__file__).parent / "html"
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"], default_for_string=True),
        )
        self._register_filters()
        self._default_template = self.env.from_string(DEFAULT_TEMPLATE)

    def _register_filters(self):
        """Register custom Jinja2 filters for data formatting."""
        self.env.filters["format_currency"] = format_currency

    @staticmethod
    def template_file(report_type: str) -> str:
        return f"{report_type}.html"

    def try_render(self, report_type: str, context: Mapping[str, Any]) -> RenderResult:
        """
        Render the named template for ``report_type`` without falling back.

        Returns:
            RenderResult with ``html`` set, or with ``error`` set when the
            template is missing, unreadable, malformed, or renders empty.
        """
        name = self.template_file(report_type)
        if not _TEMPLATE_NAME.match(report_type or ""):
            return RenderResult(
                html=None,
                template_name=name,
                error=RenderError(name, "invalid report type name"),
            )

        try:
            template = self.env.get_template(name)
            html = template.render(**context)
        except (TemplateError, OSError, UnicodeDecodeError) as e:
            reason = f"{type(e).__name__}: {e}"
            return RenderResult(html=None, template_name=name, error=RenderError(name, reason))

        if not html.strip():
            return RenderResult(
                html=None,
                template_name=name,
                error=RenderError(name, "template produced an empty document"),
            )

        return RenderResult(html=html, template_name=name)

    def render_default(self, context: Mapping[str, Any]) -> str:
        """Render the built-in default template."""
        return self._default_template.render(**context)

    def render(
        self,
        report_type: str,
        users: Sequence[Mapping[str, Any]],
        title: Optional[str] = None,
        description: Optional[str] = None,
        generated_at: Optional[datetime] = None,
    ) -> RenderResult:
        """
        Render a report, falling back to the default template on RenderError.

        Args:
            report_type: Template key, e.g. "employee"
            users: User records to include
            title: Explicit title, else "<Report_type> Report"
            description: Optional description, empty if absent
            generated_at: Generation timestamp, defaults to now

        Returns:
            RenderResult whose ``html`` is always a non-empty document
        """
        context = ReportContext(
            report_type=report_type,
            users=users,
            title=title,
            description=description,
            generated_at=generated_at or datetime.now(),
        ).to_dict()

        result = self.try_render(report_type, context)
        if result.ok:
            logger.debug(f"Rendered {result.template_name} for {len(users)} users")
            return result

        logger.warning(f"{result.error}; using default template")
        return RenderResult(
            html=self.render_default(context),
            template_name=DEFAULT_TEMPLATE_NAME,
            error=result.error,
            used_fallback=True,
        )
