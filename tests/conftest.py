"""
Shared test fixtures.

Provides isolated settings (temporary database and downloads directory),
a PDF generator stand-in that writes a small file instead of launching a
browser, and a TestClient wired to both.
"""

from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

from api.config import (
    DatabaseSettings,
    Environment,
    Settings,
    StorageSettings,
)
from api.database import DatabaseManager, DatabaseSession
from api.dependencies import get_pdf_generator
from api.main import create_application
from core.reporting.errors import RasterizeError

FAKE_PDF_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\n%%EOF\n"


class FakePDFGenerator:
    """Records rendered HTML and writes a stub PDF, or fails on demand."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.error: Optional[RasterizeError] = None

    async def generate(self, html_content: str, output_path: Path) -> Path:
        self.calls.append({"html": html_content, "output_path": output_path})
        if self.error is not None:
            raise self.error
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(FAKE_PDF_BYTES)
        return output_path

    @property
    def last_html(self) -> str:
        return self.calls[-1]["html"]


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway database and downloads directory."""
    return Settings(
        environment=Environment.TESTING,
        seed_sample_data=False,
        database=DatabaseSettings(path=tmp_path / "data" / "test.db"),
        storage=StorageSettings(downloads_dir=tmp_path / "downloads"),
    )


@pytest.fixture
def fake_pdf_generator() -> FakePDFGenerator:
    return FakePDFGenerator()


@pytest.fixture
def app(test_settings, fake_pdf_generator):
    """Create test application with the browser swapped out."""
    application = create_application(test_settings)
    application.dependency_overrides[get_pdf_generator] = lambda: fake_pdf_generator
    return application


@pytest.fixture
def client(app) -> Generator:
    """Create test client; entering it runs the lifespan handler."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_path(tmp_path) -> Path:
    return tmp_path / "store.db"


@pytest.fixture
async def db_manager(db_path) -> DatabaseManager:
    """Create database manager with temporary database."""
    manager = DatabaseManager(db_path)
    await manager.initialize()
    return manager


@pytest.fixture
async def db_session(db_manager):
    """Create database session."""
    session = DatabaseSession(db_manager)
    await session.connect()
    yield session
    await session.disconnect()


@pytest.fixture
def user_payload() -> Dict[str, Any]:
    """A valid body for POST /api/users."""
    return {
        "name": "Ada Lovelace",
        "email": "ada.lovelace@company.com",
        "phone": "+1-555-0199",
        "department": "Engineering",
        "position": "Staff Engineer",
        "salary": 120000,
        "hire_date": "2024-02-01",
    }
