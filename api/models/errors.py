"""
API Error Classes and Exception Handlers.

Provides a consistent error handling framework with typed exceptions,
error response models, and FastAPI exception handlers.
"""

import logging
import math
from enum import Enum
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"

    # Record errors
    USER_NOT_FOUND = "USER_NOT_FOUND"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"

    # Report errors
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    PDF_GENERATION_FAILED = "PDF_GENERATION_FAILED"


class ErrorDetail(BaseModel):
    """Detailed error information for a specific field or issue."""

    field: Optional[str] = Field(
        default=None, description="Field path where error occurred"
    )
    message: str = Field(..., description="Human-readable error message")
    value: Optional[Any] = Field(
        default=None, description="The invalid value (if applicable)"
    )


class ErrorResponse(BaseModel):
    """Standardized API error response model."""

    code: ErrorCode = Field(..., description="Error code for programmatic handling")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[List[ErrorDetail]] = Field(
        default=None, description="Additional error details"
    )
    request_id: Optional[str] = Field(
        default=None, description="Request correlation ID for debugging"
    )

    model_config = {"json_schema_extra": {"example": {
        "code": "USER_NOT_FOUND",
        "message": "User with ID '42' was not found",
        "details": None,
        "request_id": "req_abc123",
    }}}


class APIError(Exception):
    """Base exception class for all API errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[List[ErrorDetail]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize API error.

        Args:
            message: Human-readable error message
            code: Error code for programmatic handling
            status_code: HTTP status code
            details: Additional error details
            headers: Optional response headers
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        self.headers = headers

    def to_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        """Convert exception to ErrorResponse model."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details,
            request_id=request_id,
        )


class NotFoundError(APIError):
    """Resource not found error."""

    def __init__(
        self,
        message: str = "Resource not found",
        code: ErrorCode = ErrorCode.NOT_FOUND,
        details: Optional[List[ErrorDetail]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
        )


class UserNotFoundError(NotFoundError):
    """User not found error."""

    def __init__(self, user_id: Any) -> None:
        super().__init__(
            message=f"User with ID '{user_id}' was not found",
            code=ErrorCode.USER_NOT_FOUND,
        )


class FileNotFoundAPIError(NotFoundError):
    """Generated file not found in the downloads directory."""

    def __init__(self, filename: str) -> None:
        super().__init__(
            message=f"File '{filename}' was not found",
            code=ErrorCode.FILE_NOT_FOUND,
        )


class ValidationError(APIError):
    """Request validation error."""

    def __init__(
        self,
        message: str = "Validation error",
        details: Optional[List[ErrorDetail]] = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
        )

    @classmethod
    def from_pydantic_errors(
        cls, errors: List[Dict[str, Any]]
    ) -> "ValidationError":
        """Create ValidationError from Pydantic validation errors."""
        details = []
        for error in errors:
            loc = ".".join(str(x) for x in error.get("loc", []))
            value = error.get("input")
            if isinstance(value, float) and not math.isfinite(value):
                # JSON has no literal for inf or nan
                value = str(value)
            details.append(
                ErrorDetail(
                    field=loc if loc else None,
                    message=error.get("msg", "Invalid value"),
                    value=value,
                )
            )
        return cls(
            message="Request validation failed",
            details=details,
        )


class ConflictError(APIError):
    """Resource conflict error."""

    def __init__(
        self,
        message: str = "Resource already exists",
        code: ErrorCode = ErrorCode.ALREADY_EXISTS,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_409_CONFLICT,
        )


class EmailAlreadyExistsError(ConflictError):
    """A user with the same email is already stored."""

    def __init__(self, email: str) -> None:
        super().__init__(
            message=f"User with email '{email}' already exists",
            code=ErrorCode.EMAIL_ALREADY_EXISTS,
        )


class ProcessingError(APIError):
    """Processing/execution error."""

    def __init__(
        self,
        message: str = "Processing failed",
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[List[ErrorDetail]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
        )


class PersistenceError(ProcessingError):
    """
    Store write failed for a reason other than a uniqueness violation.

    The public message stays generic; the underlying driver error is kept
    on ``reason`` for logging.
    """

    def __init__(self, operation: str, reason: Optional[str] = None) -> None:
        super().__init__(
            message=f"Failed to {operation}",
            code=ErrorCode.PERSISTENCE_FAILED,
        )
        self.operation = operation
        self.reason = reason


class ReportGenerationError(ProcessingError):
    """Generic client-facing failure of the PDF pipeline."""

    def __init__(self) -> None:
        super().__init__(
            message="Failed to generate PDF",
            code=ErrorCode.PDF_GENERATION_FAILED,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    request_id = getattr(request.state, "correlation_id", None)
    response = exc.to_response(request_id=request_id)
    return JSONResponse(
        status_code=exc.status_code,
        content=response.model_dump(mode="json", exclude_none=True),
        headers=exc.headers,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors raised while parsing a request."""
    error = ValidationError.from_pydantic_errors(exc.errors())
    return await api_error_handler(request, error)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (unknown paths, bad methods) as ErrorResponse."""
    request_id = getattr(request.state, "correlation_id", None)
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        code = ErrorCode.NOT_FOUND
        message = f"Path not found: {request.url.path}"
    else:
        code = ErrorCode.INTERNAL_ERROR if exc.status_code >= 500 else ErrorCode.VALIDATION_ERROR
        message = str(exc.detail)
    response = ErrorResponse(code=code, message=message, request_id=request_id)
    return JSONResponse(
        status_code=exc.status_code,
        content=response.model_dump(mode="json", exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
