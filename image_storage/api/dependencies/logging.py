"""
Request Logging Middleware
===========================
Logs storage requests and responses with a request ID and timing.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from image_storage.core.logging_config import get_logger


logger = get_logger(__name__)

# Probe endpoints are polled constantly; log them at DEBUG only
QUIET_PATH_PREFIXES = ("/api/v1/health",)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log all HTTP requests and responses

    Adds ``X-Request-ID`` and ``X-Process-Time`` headers to every response.
    An incoming ``X-Request-ID`` header is reused instead of generating one.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        path = request.url.path
        request_logger = logger.bind(
            request_id=request_id,
            method=request.method,
            path=path,
        )
        level = "DEBUG" if path.startswith(QUIET_PATH_PREFIXES) else "INFO"

        start_time = time.perf_counter()
        request_logger.bind(
            client_host=request.client.host if request.client else "unknown",
        ).log(level, f"Incoming request {request.method} {path}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.perf_counter() - start_time
            request_logger.error(
                f"Request failed after {process_time:.4f}s: {e}"
            )
            raise

        process_time = round(time.perf_counter() - start_time, 4)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        request_logger.bind(
            status_code=response.status_code,
            process_time=process_time,
        ).log(level, f"Request completed with {response.status_code}")

        return response
