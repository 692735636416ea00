"""
FastAPI Dependency Injection Setup.

Provides reusable dependencies for settings, database sessions, the
template engine, the PDF generator and the report service. Shared objects
are created once by the application lifespan and kept on ``app.state``.
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request

from api.config import Settings
from api.database import DatabaseManager, DatabaseSession
from core.reporting.pdf import PDFConfig, PDFReportGenerator
from core.reporting.service import ReportService
from core.reporting.templates import ReportTemplateEngine

logger = logging.getLogger(__name__)


# =============================================================================
# Factories (used by the lifespan handler and the CLI)
# =============================================================================


def create_database_manager(settings: Settings) -> DatabaseManager:
    """Build the database manager described by ``settings``."""
    return DatabaseManager(
        settings.database.path,
        seed_sample_data=settings.seed_sample_data,
    )


def create_template_engine(settings: Settings) -> ReportTemplateEngine:
    """Build the template engine reading from the configured directory."""
    return ReportTemplateEngine(template_dir=settings.storage.templates_dir)


def create_pdf_generator(settings: Settings) -> PDFReportGenerator:
    """Build the PDF generator from the ``pdf`` settings group."""
    return PDFReportGenerator(
        PDFConfig(
            margin_mm=settings.pdf.margin_mm,
            timeout_ms=settings.pdf.timeout_ms,
            headless=settings.pdf.headless,
            launch_args=list(settings.pdf.launch_args),
        )
    )


# =============================================================================
# Settings Dependency
# =============================================================================


def get_app_settings(request: Request) -> Settings:
    """
    Get application settings dependency.

    Returns:
        Settings the application was created with.
    """
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_app_settings)]


# =============================================================================
# Database Session Dependencies
# =============================================================================


async def get_db_session(
    request: Request,
) -> AsyncGenerator[DatabaseSession, None]:
    """
    Get database session dependency.

    Yields:
        DatabaseSession instance that is automatically closed.
    """
    session = DatabaseSession(request.app.state.db_manager)
    try:
        await session.connect()
        yield session
    finally:
        await session.disconnect()


DBSessionDep = Annotated[DatabaseSession, Depends(get_db_session)]


# =============================================================================
# Reporting Dependencies
# =============================================================================


def get_template_engine(request: Request) -> ReportTemplateEngine:
    """Get the shared template engine."""
    return request.app.state.template_engine


TemplateEngineDep = Annotated[ReportTemplateEngine, Depends(get_template_engine)]


def get_pdf_generator(request: Request) -> PDFReportGenerator:
    """Get the PDF generator. Each generate() call launches its own browser."""
    return request.app.state.pdf_generator


PDFGeneratorDep = Annotated[PDFReportGenerator, Depends(get_pdf_generator)]


def get_report_service(
    session: DBSessionDep,
    renderer: TemplateEngineDep,
    pdf_generator: PDFGeneratorDep,
    settings: SettingsDep,
) -> ReportService:
    """Assemble a report service bound to this request's database session."""
    return ReportService(
        store=session,
        renderer=renderer,
        pdf_generator=pdf_generator,
        downloads_dir=settings.storage.downloads_dir,
        default_generated_by=settings.default_generated_by,
    )


ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
