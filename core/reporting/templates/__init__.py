"""
ReportForge Reporting - Template System

Provides Jinja2-based template rendering for generating HTML reports.
"""

from .base import DEFAULT_TEMPLATE_NAME, RenderResult, ReportTemplateEngine
from .context import ReportContext, format_currency

__all__ = [
    "DEFAULT_TEMPLATE_NAME",
    "RenderResult",
    "ReportTemplateEngine",
    "ReportContext",
    "format_currency",
]
