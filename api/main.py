"""
FastAPI Application Entry Point.

Initializes the FastAPI application with all routers, middleware,
exception handlers, and startup/shutdown events.

ReportForge API - employee records and PDF reports.

This FastAPI application provides endpoints for:
- Listing, retrieving and adding users
- Generating PDF reports from user records
- Browsing report history
- Downloading generated PDFs
- Health checks

See /api/docs for interactive Swagger documentation (debug mode).
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.config import Settings, get_settings
from api.dependencies import (
    create_database_manager,
    create_pdf_generator,
    create_template_engine,
)
from api.middleware import setup_middleware
from api.models.errors import register_exception_handlers
from api.routes import api_router, downloads_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


# OpenAPI metadata
TAGS_METADATA = [
    {
        "name": "Users",
        "description": "Employee records included in reports.",
    },
    {
        "name": "Reports",
        "description": "Generate PDF reports and browse the report history.",
    },
    {
        "name": "Downloads",
        "description": "Generated PDF files.",
    },
    {
        "name": "Health",
        "description": "Database, storage and template health.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler for startup and shutdown events.

    Startup:
    - Create the downloads directory
    - Initialize the database schema (and sample users if enabled)
    - Build the template engine and PDF generator shared by requests
    """
    settings: Settings = app.state.settings

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment.value}")
    logger.info(f"Debug mode: {settings.debug}")

    settings.storage.downloads_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Downloads directory: {settings.storage.downloads_dir}")

    db_manager = create_database_manager(settings)
    await db_manager.initialize()
    app.state.db_manager = db_manager

    app.state.template_engine = create_template_engine(settings)
    logger.info(f"Template directory: {settings.storage.templates_dir}")

    app.state.pdf_generator = create_pdf_generator(settings)

    logger.info("Application startup complete")

    yield  # Application runs here

    logger.info("Application shutdown complete")


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use; loaded from the environment if omitted.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    openapi_config = settings.get_openapi_config()

    app = FastAPI(
        title=openapi_config["title"],
        version=openapi_config["version"],
        description=openapi_config["description"],
        license_info=openapi_config.get("license_info"),
        openapi_tags=TAGS_METADATA,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
        openapi_url="/api/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings

    # Environment mode only changes verbosity
    logging.getLogger().setLevel(settings.log_level.value)

    if settings.cors.enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors.allow_origins,
            allow_credentials=settings.cors.allow_credentials,
            allow_methods=settings.cors.allow_methods,
            allow_headers=settings.cors.allow_headers,
            max_age=settings.cors.max_age,
        )
        logger.info("CORS middleware configured")

    setup_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(api_router)
    app.include_router(downloads_router)

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Root endpoint with API information."""
        return JSONResponse(
            content={
                "name": settings.app_name,
                "version": settings.app_version,
                "environment": settings.environment.value,
                "docs_url": "/api/docs" if settings.debug else None,
                "health_url": "/api/health",
            }
        )

    logger.info(f"Application configured with {len(app.routes)} routes")

    return app


# Create the application instance
app = create_application()


# CLI entry point for development
if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.value.lower(),
    )
