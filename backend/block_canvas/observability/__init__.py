from block_canvas.observability.logger import (
    configure_logging,
    get_logger,
    get_request_id,
    set_request_id,
)
from block_canvas.observability.middleware import REQUEST_ID_HEADER, RequestLoggingMiddleware

__all__ = [
    "configure_logging",
    "get_logger",
    "get_request_id",
    "set_request_id",
    "REQUEST_ID_HEADER",
    "RequestLoggingMiddleware",
]
