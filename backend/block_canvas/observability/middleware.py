"""
HTTP middleware: request id propagation and access logging.
"""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from block_canvas.observability.logger import get_logger, set_request_id

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Tags the request with an id (the caller's X-Request-ID or a new one),
    logs method, path, status and duration, and echoes the id back.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        start_time = time.perf_counter()

        response: Response = await call_next(request)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
