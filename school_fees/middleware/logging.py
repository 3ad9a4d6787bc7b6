"""Request logging middleware."""

import logging
import time
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with a request id, status and duration."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Reuse the caller's request id when one is supplied
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        route = f"{request.method} {request.url.path}"

        started = time.perf_counter()
        logger.debug("[%s] %s started", request_id, route)

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error("[%s] %s failed after %.1fms", request_id, route, elapsed_ms)
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "[%s] %s -> %d (%.1fms)",
            request_id,
            route,
            response.status_code,
            elapsed_ms,
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
