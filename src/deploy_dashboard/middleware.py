"""
Middleware for correlation ID tracking and request logging.
"""

import time
import uuid
import logging
from typing import Callable, Optional, Sequence

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from deploy_dashboard.utils.error_utils import reset_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle correlation ID generation and propagation.

    The ID is taken from the request header when present, stored on the
    request state and in the logging context, and echoed in the response.
    """

    def __init__(self, app: ASGIApp, header_name: str = "x-correlation-id"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        token = set_correlation_id(correlation_id)
        try:
            response = await call_next(request)
        finally:
            reset_correlation_id(token)

        response.headers[self.header_name] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for structured request/response logging.

    Health probes are excluded by default to keep the log readable.
    """

    def __init__(self, app: ASGIApp, exclude_paths: Optional[Sequence[str]] = None):
        super().__init__(app)
        self.exclude_paths = list(exclude_paths) if exclude_paths is not None else ["/health"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        start_time = time.time()
        correlation_id = getattr(request.state, "correlation_id", "unknown")

        logger.info(
            "Request started",
            extra={
                "method": request.method,
                "path": str(request.url.path),
                "client_ip": request.client.host if request.client else None,
                "correlation_id": correlation_id,
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    "method": request.method,
                    "path": str(request.url.path),
                    "process_time": round(time.time() - start_time, 4),
                    "correlation_id": correlation_id,
                    "exception_type": type(e).__name__,
                },
            )
            raise

        logger.info(
            "Request completed",
            extra={
                "status_code": response.status_code,
                "process_time": round(time.time() - start_time, 4),
                "correlation_id": correlation_id,
                "method": request.method,
                "path": str(request.url.path),
            },
        )
        return response
