"""
ReportForge Reporting - Report Generation Service

Runs one report request through the pipeline:

    resolve users -> render HTML -> rasterize PDF -> persist report record

The service holds no state between requests. A failure in any stage
aborts the request; nothing is retried. If rasterization fails no report
record is written. If persisting the record fails after the PDF exists,
the file is left where it is.
"""

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from core.reporting.pdf import PDFReportGenerator
from core.reporting.templates import ReportTemplateEngine
from core.reporting.templates.context import default_title

logger = logging.getLogger(__name__)


class ReportStore(Protocol):
    """Record-store operations the pipeline depends on."""

    async def list_users_by_ids(self, user_ids: Iterable[int]) -> List[Dict[str, Any]]: ...

    async def list_users_by_name(self) -> List[Dict[str, Any]]: ...

    async def create_report(self, report_data: Mapping[str, Any]) -> int: ...


@dataclass
class ReportRequest:
    """What to generate."""

    report_type: str
    user_ids: List[int] = field(default_factory=list)
    title: Optional[str] = None
    description: Optional[str] = None
    generated_by: Optional[str] = None


@dataclass
class GeneratedReport:
    """Outcome of a successful generation."""

    report_id: int
    filename: str
    file_path: Path
    download_url: str
    title: str
    user_count: int
    template_name: str
    used_fallback: bool = False


class ReportService:
    """
    Orchestrates report generation for a single request.

    Args:
        store: Record store (a connected DatabaseSession in the API)
        renderer: Template engine
        pdf_generator: HTML to PDF rasterizer
        downloads_dir: Directory receiving generated PDFs
        default_generated_by: Author label when the request names none
        download_prefix: URL prefix under which downloads are served
    """

    def __init__(
        self,
        store: ReportStore,
        renderer: ReportTemplateEngine,
        pdf_generator: PDFReportGenerator,
        downloads_dir: Path,
        default_generated_by: str = "System",
        download_prefix: str = "/downloads",
    ):
        self.store = store
        self.renderer = renderer
        self.pdf_generator = pdf_generator
        self.downloads_dir = downloads_dir
        self.default_generated_by = default_generated_by
        self.download_prefix = download_prefix.rstrip("/")

    @staticmethod
    def new_filename() -> str:
        return f"report_{uuid.uuid4()}.pdf"

    async def resolve_users(self, user_ids: Optional[Iterable[int]]) -> List[Dict[str, Any]]:
        """
        Pick the users a report covers.

        A non-empty ``user_ids`` selects exactly those users (unknown IDs are
        dropped). Otherwise every user is included, ordered by name.
        """
        ids = list(user_ids or [])
        if ids:
            users = await self.store.list_users_by_ids(ids)
            if len(users) < len(set(ids)):
                logger.debug(
                    f"{len(set(ids)) - len(users)} requested user IDs had no match"
                )
            return users
        return await self.store.list_users_by_name()

    async def generate(self, request: ReportRequest) -> GeneratedReport:
        """
        Generate a PDF report and record it.

        Raises:
            RasterizeError: PDF could not be produced, nothing was recorded
            PersistenceError: Users could not be read or the report record
                could not be stored
        """
        users = await self.resolve_users(request.user_ids)
        title = request.title or default_title(request.report_type)

        rendered = self.renderer.render(
            request.report_type,
            users,
            title=title,
            description=request.description,
        )

        filename = self.new_filename()
        output_path = self.downloads_dir / filename
        await self.pdf_generator.generate(rendered.html, output_path)

        report_id = await self.store.create_report({
            "title": title,
            "description": request.description or "",
            "report_type": request.report_type,
            "generated_by": request.generated_by or self.default_generated_by,
            "file_path": filename,
        })

        logger.info(
            f"Generated report {report_id} ({request.report_type}, "
            f"{len(users)} users, template {rendered.template_name}) -> {filename}"
        )

        return GeneratedReport(
            report_id=report_id,
            filename=filename,
            file_path=output_path,
            download_url=f"{self.download_prefix}/{filename}",
            title=title,
            user_count=len(users),
            template_name=rendered.template_name,
            used_fallback=rendered.used_fallback,
        )
