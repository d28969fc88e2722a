"""Request pipeline middleware for the Training Demo Service.

Registered by ``create_app`` so that requests pass, outermost first:
correlation ID, request logging, terminal error handler, JSON body parser,
static files, merge inspection, then route dispatch.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

from fastapi import Request
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse, Response
from starlette.staticfiles import StaticFiles
from starlette.types import ASGIApp
from training_service_libs.logging_utils import bind_request_context, create_service_logger

from services.training_demo_service.config import TrainingDemoSettings
from services.training_demo_service.json_utils import reject_non_json_constant
from services.training_demo_service.protocols import JsonMergerProtocol

logger = create_service_logger("training_demo.middleware")

INTERNAL_SERVER_ERROR = "Internal Server Error"


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Middleware to ensure every request has a correlation ID."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Extract or generate correlation ID and store in request state."""
        x_correlation_id = request.headers.get("X-Correlation-ID")
        if x_correlation_id:
            try:
                correlation_id = UUID(x_correlation_id)
            except ValueError:
                logger.warning(
                    f"Invalid correlation ID format: {x_correlation_id}, generating new one"
                )
                correlation_id = uuid4()
        else:
            correlation_id = uuid4()

        request.state.correlation_id = correlation_id
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = str(correlation_id)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Binds request context into structlog and logs every completed request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = getattr(request.state, "correlation_id", None) or uuid4()
        bind_request_context(correlation_id, request.method, request.url.path)

        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Terminal error handler: any unhandled exception becomes one JSON 500.

    The exception message is exposed as ``debug`` only in development.
    """

    def __init__(self, app: ASGIApp, settings: TrainingDemoSettings) -> None:
        super().__init__(app)
        self._include_debug = settings.is_development()

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(f"Error occurred: {e}", exc_info=True)
            content: dict[str, Any] = {"error": INTERNAL_SERVER_ERROR}
            if self._include_debug:
                content["debug"] = str(e)
            return JSONResponse(status_code=500, content=content)


def _is_json_media_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


class JsonBodyMiddleware(BaseHTTPMiddleware):
    """Parses JSON request bodies into ``request.state.json_body``.

    Parsing is strict: only objects and arrays are accepted at the top level.
    A non-empty body of another content type sets
    ``request.state.unparsed_body`` instead.
    """

    def __init__(self, app: ASGIApp, limit_bytes: int) -> None:
        super().__init__(app)
        self._limit_bytes = limit_bytes

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.json_body = None
        request.state.unparsed_body = False

        is_json = _is_json_media_type(request.headers.get("content-type", ""))
        if is_json and self._declared_length(request) > self._limit_bytes:
            return self._payload_too_large()

        raw = await request.body()
        if not raw:
            return await call_next(request)

        if not is_json:
            request.state.unparsed_body = True
            return await call_next(request)

        if len(raw) > self._limit_bytes:
            return self._payload_too_large()

        try:
            body = json.loads(raw.decode("utf-8"), parse_constant=reject_non_json_constant)
        except ValueError as e:
            logger.warning("Rejected malformed JSON body", error=str(e))
            return JSONResponse(status_code=400, content={"error": f"Invalid JSON body: {e}"})
        except RecursionError:
            logger.warning("Rejected JSON body nested beyond the parser limit")
            return JSONResponse(
                status_code=400,
                content={"error": "Invalid JSON body: nesting too deep"},
            )

        if not isinstance(body, (dict, list)):
            logger.warning("Rejected non-container JSON body", body_type=type(body).__name__)
            return JSONResponse(
                status_code=400,
                content={"error": "Invalid JSON body: expected an object or an array"},
            )

        request.state.json_body = body
        return await call_next(request)

    @staticmethod
    def _declared_length(request: Request) -> int:
        try:
            return int(request.headers.get("content-length", "0"))
        except ValueError:
            return 0

    def _payload_too_large(self) -> JSONResponse:
        logger.warning("Rejected oversized JSON body", limit_bytes=self._limit_bytes)
        return JSONResponse(status_code=413, content={"error": "Payload Too Large"})


class StaticFilesMiddleware(BaseHTTPMiddleware):
    """Serves files from the public directory ahead of the routes.

    A hit short-circuits the pipeline; a miss falls through to route dispatch.
    Directory index files are not served.
    """

    def __init__(self, app: ASGIApp, directory: Path) -> None:
        super().__init__(app)
        self._static = StaticFiles(directory=directory, html=False, check_dir=False)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method not in ("GET", "HEAD"):
            return await call_next(request)

        path = self._static.get_path(request.scope)
        try:
            return await self._static.get_response(path, request.scope)
        except HTTPException as e:
            if e.status_code == 404:
                return await call_next(request)
            return JSONResponse(status_code=e.status_code, content={"detail": e.detail})


class MergeInspectionMiddleware(BaseHTTPMiddleware):
    """Deep-merges every object-like JSON body into an empty mapping and drops the result.

    Has no effect on the response. Errors propagate to the error handler.
    """

    def __init__(self, app: ASGIApp, merger: JsonMergerProtocol) -> None:
        super().__init__(app)
        self._merger = merger

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        body = getattr(request.state, "json_body", None)
        if isinstance(body, (dict, list)):
            self._merger.merge({}, body)
        return await call_next(request)
