"""Request Middleware — ordered request-ID, access-log and recovery stages.

Invariants:
    - Order (outermost first): RequestId → RequestLogger → Recovery → router
    - Every response carries a fresh, non-empty X-Request-ID header
    - Exactly one "request" log entry per request, emitted even when the inner
      pipeline fails
    - Any unhandled exception becomes a generic 500; the process keeps serving

Design Decisions:
    - Recovery is the innermost stage so that fault responses still pass through
      the logger and receive the request id header
    - Request id stored on request.state and in a ContextVar for log records
"""

import logging
import time
import uuid

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from userapi.api.error_handlers import build_internal_error_response
from userapi.infrastructure.observability import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with a uuid4 and echo it on the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and elapsed time once per request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 3),
                },
            )


class RecoveryMiddleware(BaseHTTPMiddleware):
    """Convert unhandled faults into a generic 500 response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                f"Unhandled exception on {request.url.path}: {e}",
                exc_info=True,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=build_internal_error_response(),
            )


def register_middleware(app: FastAPI) -> None:
    """Install the chain; Starlette runs the last-added middleware outermost."""
    app.add_middleware(RecoveryMiddleware)
    app.add_middleware(RequestLoggerMiddleware)
    app.add_middleware(RequestIdMiddleware)
