"""
Downloads Route.

Serves generated PDF files from the downloads directory.
"""

import logging
import re

from fastapi import APIRouter
from fastapi.responses import FileResponse

from api.dependencies import SettingsDep
from api.models.errors import FileNotFoundAPIError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/downloads", tags=["Downloads"])

# Plain file names only; anything with a path separator never matches
_SAFE_FILENAME = re.compile(r"^[A-Za-z0-9_.-]+\.pdf$")


@router.get(
    "/{filename}",
    response_class=FileResponse,
    summary="Download a generated PDF",
    responses={404: {"description": "File not found"}},
)
async def download_report(filename: str, settings: SettingsDep) -> FileResponse:
    if not _SAFE_FILENAME.match(filename) or filename.startswith("."):
        raise FileNotFoundAPIError(filename)

    path = settings.storage.downloads_dir / filename
    if not path.is_file():
        raise FileNotFoundAPIError(filename)

    return FileResponse(path, media_type="application/pdf", filename=filename)
