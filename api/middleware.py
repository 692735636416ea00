"""
FastAPI Middleware Components.

Provides correlation IDs, request logging, timing, request size limits
and a last-resort error handler for the API.
"""

import logging
import time
import uuid
from typing import List, Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from api.config import Settings
from api.models.errors import ErrorCode, ErrorResponse

logger = logging.getLogger(__name__)


def _correlation_id(request: Request) -> Optional[str]:
    return getattr(request.state, "correlation_id", None)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Attach a correlation ID to each request.

    Reuses the X-Correlation-ID header when the client sends one and
    echoes the ID back on the response.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Correlation-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = request.headers.get(self.header_name) or f"req_{uuid.uuid4().hex[:12]}"
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers[self.header_name] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, client and status of every request."""

    def __init__(
        self,
        app: ASGIApp,
        log_request_body: bool = False,
        exclude_paths: Optional[List[str]] = None,
    ) -> None:
        super().__init__(app)
        self.log_request_body = log_request_body
        self.exclude_paths = exclude_paths or ["/api/health"]

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"
        correlation_id = _correlation_id(request)

        logger.info(f"Request: {method} {path} | Client: {client_ip} | Correlation: {correlation_id}")

        if self.log_request_body and method in ("POST", "PUT", "PATCH"):
            body = await request.body()
            if body:
                logger.debug(f"Request body: {body.decode('utf-8', errors='replace')[:1000]}")

        response = await call_next(request)

        logger.info(
            f"Response: {method} {path} | "
            f"Status: {response.status_code} | "
            f"Correlation: {correlation_id}"
        )
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """
    Measure request processing time.

    Adds an X-Response-Time header and warns about slow requests.
    """

    def __init__(
        self,
        app: ASGIApp,
        header_name: str = "X-Response-Time",
        slow_request_threshold_ms: float = 10_000.0,
    ) -> None:
        super().__init__(app)
        self.header_name = header_name
        self.slow_request_threshold_ms = slow_request_threshold_ms

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start_time) * 1000.0

        response.headers[self.header_name] = f"{elapsed_ms:.2f}ms"
        if elapsed_ms > self.slow_request_threshold_ms:
            logger.warning(
                f"Slow request: {request.method} {request.url.path} "
                f"took {elapsed_ms:.2f}ms | Correlation: {_correlation_id(request)}"
            )
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Convert exceptions that escaped the route handlers into ErrorResponse.

    API errors are already rendered by the registered exception handlers;
    this catches everything else, logs the traceback and returns a generic
    500 (the exception text is only exposed in debug mode).
    """

    def __init__(self, app: ASGIApp, debug: bool = False) -> None:
        super().__init__(app)
        self.debug = debug

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            correlation_id = _correlation_id(request)
            logger.exception(
                f"Unhandled exception: {type(e).__name__}: {e} | "
                f"Correlation: {correlation_id}"
            )
            error_response = ErrorResponse(
                code=ErrorCode.INTERNAL_ERROR,
                message=str(e) if self.debug else "An unexpected error occurred",
                request_id=correlation_id,
            )
            return JSONResponse(
                status_code=500,
                content=error_response.model_dump(mode="json", exclude_none=True),
            )


class RequestSizeMiddleware(BaseHTTPMiddleware):
    """Reject request bodies larger than ``max_size_bytes`` with 413."""

    def __init__(self, app: ASGIApp, max_size_bytes: int = 1024 * 1024) -> None:
        super().__init__(app)
        self.max_size_bytes = max_size_bytes

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_size_bytes:
            response = ErrorResponse(
                code=ErrorCode.VALIDATION_ERROR,
                message=f"Request body too large. Maximum size is {self.max_size_bytes} bytes.",
                request_id=_correlation_id(request),
            )
            return JSONResponse(
                status_code=413,
                content=response.model_dump(mode="json", exclude_none=True),
            )

        return await call_next(request)


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Configure all middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    # Middleware run in reverse order of addition
    app.add_middleware(ErrorHandlingMiddleware, debug=settings.debug)
    app.add_middleware(RequestSizeMiddleware, max_size_bytes=settings.max_request_size)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestLoggingMiddleware, log_request_body=settings.debug)

    # Correlation ID runs first so every later layer can log it
    app.add_middleware(CorrelationIdMiddleware)

    logger.info("Middleware configured successfully")
