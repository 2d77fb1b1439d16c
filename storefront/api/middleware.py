"""HTTP middleware for the storefront.

Request correlation and timing, auth context resolution and the
last-resort error envelope. The ``error_body`` helper is shared with the
exception handlers in ``storefront.main``.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from storefront.api.auth import resolve_auth_context

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def error_body(
    request: Request,
    error_code: str,
    message: str,
    details: list | None = None,
) -> dict:
    """Build the JSON error envelope for ``request``.

    Args:
        request: Request being answered; supplies the correlation id.
        error_code: Machine-readable code such as ``STORE_ERROR``.
        message: Human-readable summary.
        details: Per-field entries, if any.

    Returns:
        Envelope matching ``ErrorResponse``.
    """
    return {
        "error_code": error_code,
        "message": message,
        "details": details or [],
        "request_id": getattr(request.state, "request_id", None),
    }


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Correlate a request with its logs and its response.

    An incoming ``X-Request-ID`` is reused, otherwise a UUID4 is minted.
    The id lives on ``request.state``, in the structlog context for the
    duration of the request, and on the response headers.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        started = time.perf_counter()

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                logger.info(
                    "Request completed",
                    method=request.method,
                    path=request.url.path,
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class AuthContextMiddleware(BaseHTTPMiddleware):
    """Resolve the Authorization header into ``request.state.auth``.

    The middleware never rejects a request; route dependencies such as
    ``require_admin`` decide what an anonymous or low-role caller may do.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        context = resolve_auth_context(request.headers.get("Authorization"))
        request.state.auth = context

        if context.failure:
            logger.warning(
                "Rejected credentials",
                path=request.url.path,
                method=request.method,
                reason=context.failure,
            )

        return await call_next(request)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn exceptions that escape the routers into a 500 envelope."""

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
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_body(request, "INTERNAL_ERROR", "An internal error occurred"),
            )


def setup_middleware(app: FastAPI) -> None:
    """Install the storefront middleware stack.

    Starlette runs the last-added middleware first, so request ids are
    assigned before auth is resolved and before any error is rendered.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(AuthContextMiddleware)
    app.add_middleware(RequestIdMiddleware)
