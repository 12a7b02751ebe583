"""API middleware and error envelopes for the catalog API.

Provides:
- Request ID correlation
- Error handling for unexpected exceptions
- The error envelope shared with the exception handlers
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()


def error_response(
    status_code: int,
    error_code: str,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build an error response in the standard envelope.

    Args:
        status_code: HTTP status.
        error_code: Machine-readable error code.
        message: Human-readable message.
        headers: Extra response headers.

    Returns:
        JSON response ``{success: false, message, error}``.
    """
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "error": error_code,
        },
        headers=headers,
    )


# ============================================================================
# Request correlation
# ============================================================================


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log one access line per request.

    A client-supplied ``X-Request-ID`` is reused; otherwise a UUID is
    minted. The ID is bound into the structlog context for the duration
    of the request and echoed on the response.
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
        finally:
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code if response is not None else 500,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[self.HEADER_NAME] = request_id
        return response


# ============================================================================
# Fallback error envelope
# ============================================================================


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn exceptions no handler claimed into a 500 envelope.

    The client only sees "Server error"; the traceback goes to the log.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_ERROR",
                "Server error",
            )


def setup_middleware(app: FastAPI) -> None:
    """Install the catalog middleware stack.

    Starlette runs the last-added middleware first, so the error handler
    is added first to sit outside request correlation.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestIdMiddleware)
