"""
Playwright E2E test fixtures.

These tests launch a real headless Chromium. They are skipped when the
browser binary has not been installed (``playwright install chromium``).
"""

from pathlib import Path

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

ARTIFACTS_DIR = Path(__file__).parent / "artifacts"


def _chromium_available() -> bool:
    try:
        with sync_playwright() as playwright:
            return Path(playwright.chromium.executable_path).exists()
    except PlaywrightError:
        return False


@pytest.fixture(scope="session")
def require_chromium():
    if not _chromium_available():
        pytest.skip("Chromium for Playwright is not installed")


@pytest.fixture(scope="session")
def artifacts_dir() -> Path:
    """Create and return the artifacts directory (kept for inspection)."""
    ARTIFACTS_DIR.mkdir(parents=True, exist_ok=True)
    return ARTIFACTS_DIR
