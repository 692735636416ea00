"""
ReportForge API Package.

This package provides the FastAPI-based REST API for storing employee
records and turning them into downloadable PDF reports.

Modules:
    config: Pydantic settings loaded from the environment
    database: SQLite access for users and report history
    dependencies: Request-scoped dependencies built from app.state
    middleware: Correlation IDs, request logging, timing and size limits
    routes: Users, reports, downloads and health endpoints

Usage:
    from api.main import create_application
    app = create_application()
"""

# Version
__version__ = "0.1.0"

__all__ = ["__version__"]
