"""
ReportForge Reporting - PDF Report Generator

Converts HTML reports to PDFs with headless Chromium driven by Playwright.
"""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from core.reporting.errors import RasterizeError

logger = logging.getLogger(__name__)


class PageSize(Enum):
    """Paper formats understood by Chromium's print engine."""
    A4 = "A4"            # 210x297mm (International standard)
    LETTER = "Letter"    # 8.5x11" (US standard)
    TABLOID = "Tabloid"  # 11x17" (Large format)


@dataclass
class PDFConfig:
    """
    Configuration for PDF generation.

    Attributes:
        page_size: Paper size
        landscape: Landscape orientation instead of portrait
        margin_mm: Margin applied to all four sides, in millimeters
        print_background: Include CSS backgrounds and gradients
        timeout_ms: Limit for loading the HTML until the network is idle
        headless: Run the browser without a window
        launch_args: Extra Chromium command line switches
    """
    page_size: PageSize = PageSize.A4
    landscape: bool = False
    margin_mm: float = 20.0
    print_background: bool = True
    timeout_ms: float = 30_000
    headless: bool = True
    launch_args: List[str] = field(
        default_factory=lambda: ["--no-sandbox", "--disable-setuid-sandbox"]
    )


class PDFReportGenerator:
    """
    Rasterize HTML report content to a PDF file.

    Every call launches its own Chromium instance and closes it again,
    whether the conversion succeeds or fails. The HTML is injected with
    ``set_content`` so nothing is fetched by URL.

    Example:
        >>> generator = PDFReportGenerator(PDFConfig(margin_mm=20))
        >>> pdf_path = await generator.generate(
        ...     html_content="<html>...</html>",
        ...     output_path=Path("downloads/report.pdf")
        ... )
    """

    def __init__(self, config: Optional[PDFConfig] = None):
        """
        Initialize PDF generator.

        Args:
            config: PDF configuration. Uses defaults if not provided.
        """
        self.config = config or PDFConfig()

    def _get_pdf_options(self) -> Dict[str, Any]:
        """
        Options passed to ``page.pdf``.

        Returns:
            Page format, orientation, background flag and margins.
        """
        margin = f"{self.config.margin_mm:g}mm"
        return {
            "format": self.config.page_size.value,
            "landscape": self.config.landscape,
            "print_background": self.config.print_background,
            "margin": {
                "top": margin,
                "right": margin,
                "bottom": margin,
                "left": margin,
            },
        }

    async def generate(self, html_content: str, output_path: Path) -> Path:
        """
        Convert HTML report to PDF.

        Args:
            html_content: Complete HTML document
            output_path: Where to save the PDF

        Returns:
            Path to the generated PDF

        Raises:
            RasterizeError: If the browser cannot be launched, the content
                does not settle before the timeout, or the file is not written
        """
        start = time.perf_counter()
        stage = "setup"

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)

            stage = "launch"
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(
                    headless=self.config.headless,
                    args=self.config.launch_args,
                )
                try:
                    stage = "content load"
                    page = await browser.new_page()
                    await page.set_content(
                        html_content,
                        wait_until="networkidle",
                        timeout=self.config.timeout_ms,
                    )

                    stage = "write"
                    await page.pdf(path=str(output_path), **self._get_pdf_options())
                finally:
                    await browser.close()
        except PlaywrightError as e:
            raise RasterizeError(stage, str(e), str(output_path)) from e
        except OSError as e:
            raise RasterizeError(stage, f"{type(e).__name__}: {e}", str(output_path)) from e

        if not output_path.is_file() or output_path.stat().st_size == 0:
            raise RasterizeError("write", "no PDF was written", str(output_path))

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"Rasterized {output_path.name} "
            f"({output_path.stat().st_size} bytes) in {elapsed_ms:.0f}ms"
        )
        return output_path
