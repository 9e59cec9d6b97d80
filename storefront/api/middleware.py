"""Request correlation middleware.

Every request gets an ``X-Request-ID`` (taken from the client or
generated) that is stored on ``request.state``, bound into the structlog
context for the duration of the request and echoed on the response.
Unhandled exceptions are rendered by the application's exception
handlers, not here.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def resolve_request_id(request: Request) -> str:
    """Client supplied request ID, or a new UUID4."""
    return request.headers.get(REQUEST_ID_HEADER) or str(uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Correlate log lines and responses with a request ID."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request)
        request.state.request_id = request_id

        started = time.perf_counter()
        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            try:
                response = await call_next(request)
            except Exception:
                logger.info(
                    "Request failed",
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )
                raise

            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install the storefront middleware on ``app``."""
    app.add_middleware(RequestIdMiddleware)
