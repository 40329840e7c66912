"""
Exception handler registration that replies through the formatter.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import formatter
from .config import get_settings
from .constants import HEADER_LOCATION
from .errors import JsonErrorResponse
from .sink import ResponseBuffer

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str | None:
    return request.headers.get("X-Request-ID")


def _default_detail(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


def render_http_exception(exc: StarletteHTTPException) -> ResponseBuffer:
    """Format a Starlette ``HTTPException`` onto a fresh buffer."""

    sink = ResponseBuffer()
    headers = dict(exc.headers or {})
    detail = exc.detail if exc.detail != _default_detail(exc.status_code) else None

    location_key = next((name for name in headers if name.lower() == HEADER_LOCATION.lower()), None)
    location = headers.pop(location_key) if exc.status_code == 301 and location_key else None

    # Extra headers from the exception go on before the body is written.
    for name, value in headers.items():
        sink.set_header(name, value)

    if location is not None:
        formatter.redirect(sink, location)
    elif exc.status_code == 404:
        formatter.not_found(sink, detail)
    elif exc.status_code == 401:
        formatter.unauthorized(sink, detail)
    else:
        formatter.json(sink, {"detail": exc.detail}, exc.status_code)
    return sink


def register_exception_handlers(app: FastAPI) -> None:
    """Attach handlers that format errors with the library helpers."""

    @app.exception_handler(JsonErrorResponse)
    async def json_error_handler(request: Request, exc: JsonErrorResponse) -> Response:
        logger.warning(
            "json_error_response",
            extra={"request_id": _request_id(request), "status_code": exc.status_code},
        )
        sink = ResponseBuffer()
        formatter.json_error_response(
            sink, exc.status_code, exc.message_key, exc.err_key, exc.error_message
        )
        return sink.to_response()

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
        logger.info(
            "http_error",
            extra={"request_id": _request_id(request), "status_code": exc.status_code},
        )
        return render_http_exception(exc).to_response()

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
        logger.exception("unhandled_error", extra={"request_id": _request_id(request)})
        sink = ResponseBuffer()
        formatter.error(sink, exc if get_settings().expose_error_detail else None)
        return sink.to_response()
