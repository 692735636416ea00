"""
Reports API Routes.

Provides the report history and the PDF generation endpoint.
"""

import logging
from typing import List

from fastapi import APIRouter, Request

from api.dependencies import DBSessionDep, ReportServiceDep
from api.models.errors import PersistenceError, ReportGenerationError
from api.models.requests import GeneratePDFRequest
from api.models.responses import GeneratePDFResponse, ReportResponse
from core.reporting.errors import RasterizeError
from core.reporting.service import ReportRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Reports"])


@router.get(
    "/reports",
    response_model=List[ReportResponse],
    summary="List generated reports",
    description="Report history, most recent first.",
)
async def list_reports(db: DBSessionDep) -> List[ReportResponse]:
    rows = await db.list_reports()
    return [ReportResponse.model_validate(row) for row in rows]


@router.post(
    "/generate-pdf",
    response_model=GeneratePDFResponse,
    summary="Generate a PDF report",
    description=(
        "Renders the selected users (all users when userIds is omitted or "
        "empty) with the template for reportType and stores the PDF for download."
    ),
    responses={
        422: {"description": "Invalid request body"},
        500: {"description": "PDF generation failed"},
    },
)
async def generate_pdf(
    body: GeneratePDFRequest,
    service: ReportServiceDep,
    request: Request,
) -> GeneratePDFResponse:
    correlation_id = getattr(request.state, "correlation_id", None)
    try:
        report = await service.generate(
            ReportRequest(
                report_type=body.report_type,
                user_ids=body.user_ids or [],
                title=body.title,
                description=body.description,
                generated_by=body.generated_by,
            )
        )
    except RasterizeError as e:
        logger.error(f"Report generation failed: {e} | Correlation: {correlation_id}")
        raise ReportGenerationError() from e
    except PersistenceError as e:
        logger.error(
            f"Report store failure: {e.message}: {e.reason} | Correlation: {correlation_id}"
        )
        raise ReportGenerationError() from e

    return GeneratePDFResponse(filename=report.filename, download_url=report.download_url)
