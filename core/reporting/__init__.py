"""
ReportForge Reporting

Turns stored user records into downloadable PDF reports.

Modules:
- templates: Jinja2-based HTML report rendering with a built-in fallback
- pdf: HTML to PDF rasterization through headless Chromium
- service: the generation pipeline tying store, renderer and rasterizer together
"""

from core.reporting.errors import RasterizeError, RenderError, ReportingError
from core.reporting.templates import RenderResult, ReportTemplateEngine

__all__ = [
    "RasterizeError",
    "RenderError",
    "ReportingError",
    "RenderResult",
    "ReportTemplateEngine",
]
