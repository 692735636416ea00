"""
ReportForge Reporting - Pipeline Errors

Errors raised by the template renderer and the PDF rasterizer.
"""

from typing import Optional


class ReportingError(Exception):
    """Base class for report pipeline failures."""


class RenderError(ReportingError):
    """
    A named template could not be loaded or rendered.

    Recovered by falling back to the built-in default template.
    """

    def __init__(self, template_name: str, reason: str) -> None:
        super().__init__(f"Template '{template_name}' failed: {reason}")
        self.template_name = template_name
        self.reason = reason


class RasterizeError(ReportingError):
    """
    The headless browser failed to produce a PDF.

    Fatal to the current request.
    """

    def __init__(self, stage: str, reason: str, output_path: Optional[str] = None) -> None:
        msg = f"PDF rasterization failed during {stage}: {reason}"
        if output_path:
            msg += f" (output: {output_path})"
        super().__init__(msg)
        self.stage = stage
        self.reason = reason
        self.output_path = output_path
