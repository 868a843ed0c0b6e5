"""
Global exception handlers for the FastAPI application.

Converts exceptions into structured error responses with a correlation ID.
"""

import logging
from datetime import datetime, timezone
from typing import Union

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from deploy_dashboard.exceptions import (
    DashboardException,
    ErrorCode,
    MetadataSourceException,
)
from deploy_dashboard.schemas import ErrorResponse

logger = logging.getLogger(__name__)


def get_correlation_id(request: Request) -> str:
    """Extract correlation ID stored on the request by the middleware."""
    return getattr(request.state, "correlation_id", "unknown")


async def dashboard_exception_handler(
    request: Request,
    exc: DashboardException
) -> JSONResponse:
    """Convert DashboardException instances to structured JSON responses."""
    status_code = _get_status_code_for_exception(exc)

    error_response = ErrorResponse(
        error_code=exc.error_code.value,
        message=exc.message,
        details=exc.details,
        correlation_id=get_correlation_id(request),
        timestamp=datetime.fromisoformat(exc.timestamp),
        path=str(request.url.path),
        method=request.method,
    )

    logger.error(
        f"Application error: {exc.error_code.value}",
        extra={
            "error_data": exc.to_dict(),
            "request_path": str(request.url.path),
            "request_method": request.method,
            "status_code": status_code,
        },
    )

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json", exclude_none=True)
    )


async def http_exception_handler(
    request: Request,
    exc: Union[HTTPException, StarletteHTTPException]
) -> JSONResponse:
    """Handle standard HTTP exceptions, including unknown routes."""
    correlation_id = get_correlation_id(request)

    error_response = ErrorResponse(
        error_code=f"HTTP{exc.status_code}",
        message=str(exc.detail),
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc),
        path=str(request.url.path),
        method=request.method,
    )

    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"HTTP {exc.status_code} error",
        extra={
            "status_code": exc.status_code,
            "detail": str(exc.detail),
            "request_path": str(request.url.path),
            "request_method": request.method,
            "correlation_id": correlation_id,
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json", exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions with generic error response."""
    correlation_id = get_correlation_id(request)

    error_response = ErrorResponse(
        error_code=ErrorCode.INTERNAL_SERVER_ERROR.value,
        message="An unexpected error occurred",
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc),
        path=str(request.url.path),
        method=request.method,
        details={"exception_type": type(exc).__name__}
    )

    logger.error(
        "Unhandled exception",
        extra={
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
            "request_path": str(request.url.path),
            "request_method": request.method,
            "correlation_id": correlation_id,
        },
        exc_info=exc
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json", exclude_none=True)
    )


def _get_status_code_for_exception(exc: DashboardException) -> int:
    """Map custom exceptions to appropriate HTTP status codes."""
    if isinstance(exc, MetadataSourceException):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(DashboardException, dashboard_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
