"""
FastAPI middleware for request tracing and logging.

Every request gets an id (taken from X-Request-ID or generated), the id and
the storefront scope headers are bound to the structlog context, and the
request is logged on start and completion with its duration.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from core.logging import bind_context, clear_context, get_logger, truncate_message


logger = get_logger(__name__)

# Storefront headers worth correlating in logs
_SCOPE_HEADERS = {
    "magento-store-view-code": "store_view",
    "magento-website-code": "website",
}


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request tracing and logging.

    - Generates a request_id for each request
    - Logs request start/end with timing
    - Binds context for all logs during request processing
    - Adds X-Request-ID header to the response
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])

        bind_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        for header, key in _SCOPE_HEADERS.items():
            value = request.headers.get(header)
            if value:
                bind_context(**{key: value})

        start_time = time.perf_counter()
        logger.info(
            "Request started",
            query_params=dict(request.query_params) if request.query_params else None,
        )

        try:
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "Request failed",
                error=truncate_message(str(e)),
                error_type=type(e).__name__,
                duration_ms=round(duration_ms, 2),
            )
            raise

        finally:
            clear_context()
