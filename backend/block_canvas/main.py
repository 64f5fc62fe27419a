from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers

from block_canvas.api.routes import router
from block_canvas.config import CORS_ORIGINS
from block_canvas.ir.errors import DESCRIPTION_REQUIRED, DiagramError
from block_canvas.observability import (
    REQUEST_ID_HEADER,
    RequestLoggingMiddleware,
    configure_logging,
    get_logger,
)

configure_logging()
logger = get_logger(__name__)


class PreflightCORSMiddleware(CORSMiddleware):
    """CORSMiddleware whose OPTIONS preflight answer has no body."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        headers = {
            key: value
            for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        return Response(status_code=response.status_code, headers=headers)


app = FastAPI(
    title="Block Diagram Generator",
    version="1.0.0",
)

# Middleware FIRST
app.add_middleware(
    PreflightCORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    expose_headers=[REQUEST_ID_HEADER],
)
# added last so it wraps CORS and sees every request
app.add_middleware(RequestLoggingMiddleware)

# Routes AFTER middleware
app.include_router(router)


# ============================================================
# ERROR HANDLERS - every failure leaves as {"error": message}
# ============================================================

@app.exception_handler(DiagramError)
async def diagram_error_handler(request: Request, exc: DiagramError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # unparsable JSON or a body of the wrong shape
    if request.url.path == "/generate-diagram":
        message = DESCRIPTION_REQUIRED
    else:
        message = "Invalid request body"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Error handling %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Unknown error"})
