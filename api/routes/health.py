"""
Health Check API Routes.

Reports whether the database, the downloads directory and the template
directory are usable.
"""

import logging
import os
import time
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter

from api.config import Settings
from api.database import DatabaseSession
from api.dependencies import DBSessionDep, SettingsDep
from api.models.responses import HealthCheckComponent, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])

# Track application start time for uptime calculation
_start_time: float = time.time()


def get_uptime_seconds() -> float:
    """Get application uptime in seconds."""
    return time.time() - _start_time


async def check_database_health(db: DatabaseSession) -> HealthCheckComponent:
    """
    Check database connectivity.

    Returns:
        HealthCheckComponent with database status.
    """
    start = time.perf_counter()
    try:
        ok = await db.ping()
        latency_ms = (time.perf_counter() - start) * 1000
        return HealthCheckComponent(
            name="database",
            status="healthy" if ok else "unhealthy",
            latency_ms=latency_ms,
            message="Database connection available" if ok else "Unexpected ping result",
        )
    except Exception as e:
        latency_ms = (time.perf_counter() - start) * 1000
        logger.warning(f"Database health check failed: {e}")
        return HealthCheckComponent(
            name="database",
            status="unhealthy",
            latency_ms=latency_ms,
            message=str(e),
        )


def check_storage_health(settings: Settings) -> HealthCheckComponent:
    """
    Check that generated PDFs can be written.

    Returns:
        HealthCheckComponent with storage status.
    """
    downloads = settings.storage.downloads_dir
    if not downloads.is_dir():
        return HealthCheckComponent(
            name="storage",
            status="unhealthy",
            message=f"Downloads directory does not exist: {downloads}",
        )
    if not os.access(downloads, os.W_OK):
        return HealthCheckComponent(
            name="storage",
            status="unhealthy",
            message=f"Downloads directory is not writable: {downloads}",
        )
    return HealthCheckComponent(
        name="storage",
        status="healthy",
        message="Downloads directory writable",
    )


def check_templates_health(settings: Settings) -> HealthCheckComponent:
    """
    Check the named template directory.

    A missing directory only degrades the service: every report type
    still renders with the built-in default template.
    """
    templates = settings.storage.templates_dir
    if not templates.is_dir():
        return HealthCheckComponent(
            name="templates",
            status="degraded",
            message=f"Template directory missing, default template only: {templates}",
        )
    names = sorted(p.stem for p in templates.glob("*.html"))
    return HealthCheckComponent(
        name="templates",
        status="healthy",
        message=f"{len(names)} named templates: {', '.join(names) or 'none'}",
    )


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Checks the database, the downloads directory and the templates.",
)
async def health_check(settings: SettingsDep, db: DBSessionDep) -> HealthResponse:
    components: List[HealthCheckComponent] = [
        await check_database_health(db),
        check_storage_health(settings),
        check_templates_health(settings),
    ]

    if any(c.status == "unhealthy" for c in components):
        overall = "unhealthy"
    elif any(c.status == "degraded" for c in components):
        overall = "degraded"
    else:
        overall = "healthy"

    return HealthResponse(
        status=overall,
        version=settings.app_version,
        environment=settings.environment.value,
        uptime_seconds=get_uptime_seconds(),
        timestamp=datetime.now(timezone.utc),
        checks=components,
    )
