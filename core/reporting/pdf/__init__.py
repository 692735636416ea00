"""
ReportForge Reporting - PDF Generation Module

Rasterizes rendered HTML reports to PDF with a headless browser.
"""

from .generator import PDFConfig, PDFReportGenerator, PageSize

__all__ = ["PDFReportGenerator", "PDFConfig", "PageSize"]
