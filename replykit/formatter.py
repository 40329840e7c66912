"""
Helpers that write common response shapes onto a response sink.

Every helper sets the status code and headers first and then calls the
sink's ``send`` or ``end`` exactly once. Errors raised by the sink are not
caught.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

from .constants import (
    HEADER_CONTENT_DISPOSITION,
    HEADER_CONTENT_TYPE,
    HEADER_LOCATION,
    HEADER_VARY,
    TYPE_JSON,
    TYPE_SVG,
    TYPE_TEXT,
    TYPE_XLSX,
    VARY_ACCEPT_ENCODING,
)
from .sink import ResponseSink

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = "404 Page Not Found"
SERVER_ERROR_BODY = "500 Internal Server Error"
UNAUTHORIZED_BODY = "unauthorized"


def is_present(value: Any) -> bool:
    """Return False for None, False, empty strings/bytes, zero and NaN.

    Empty containers count as present.
    """

    if value is None or value is False:
        return False
    if isinstance(value, (str, bytes, bytearray)):
        return len(value) > 0
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    return True


def _log(sink: ResponseSink, content_type: Optional[str] = None) -> None:
    logger.debug(
        "response_formatted",
        extra={"status_code": sink.status_code, "content_type": content_type},
    )


def json_error_response(
    sink: ResponseSink,
    status_code: int,
    message_key: str,
    err_key: str,
    error_message: str,
) -> None:
    """Structured JSON error at ``status_code``.

    ``message_key`` and ``err_key`` should be keys that match a language
    translation construct.
    """

    sink.status_code = status_code
    sink.set_header(HEADER_CONTENT_TYPE, TYPE_JSON)
    _log(sink, TYPE_JSON)
    sink.send({"messageKey": message_key, "errKey": err_key, "errorMessage": error_message})


def not_found(sink: ResponseSink, message: Any = None) -> None:
    """Status 404. Page not found."""

    sink.status_code = 404
    _log(sink)
    sink.send(message if is_present(message) else NOT_FOUND_BODY)


def error(sink: ResponseSink, err: Any = None) -> None:
    """Status 500, internal server error."""

    sink.status_code = 500
    _log(sink)
    if is_present(err):
        sink.send(f"{SERVER_ERROR_BODY}: {err}")
    else:
        sink.send(SERVER_ERROR_BODY)


def json(sink: ResponseSink, data: Any, status_code: Optional[int] = None) -> None:
    """Status 200 (or ``status_code``) with content-type application/json."""

    sink.status_code = status_code if is_present(status_code) else 200
    sink.set_header(HEADER_CONTENT_TYPE, TYPE_JSON)
    _log(sink, TYPE_JSON)
    sink.send(data)


def redirect(sink: ResponseSink, location: str) -> None:
    """Status 301 redirect to ``location``."""

    sink.status_code = 301
    sink.set_header(HEADER_LOCATION, location)
    _log(sink)
    sink.end()


def unauthorized(sink: ResponseSink, data: Any = None) -> None:
    """Status 401 with content-type application/json."""

    sink.status_code = 401
    sink.set_header(HEADER_CONTENT_TYPE, TYPE_JSON)
    _log(sink, TYPE_JSON)
    sink.send(data if is_present(data) else UNAUTHORIZED_BODY)


def json_error(sink: ResponseSink, message_key: str, err_key: str, error_message: str) -> None:
    """Status 500 with a structured JSON error body."""

    json_error_response(sink, 500, message_key, err_key, error_message)


def excel(sink: ResponseSink, data: str | bytes, file_name: str) -> None:
    """Status 200 with a binary xlsx attachment."""

    sink.status_code = 200
    sink.set_header(HEADER_CONTENT_DISPOSITION, f'attachment; filename="{file_name}"')
    sink.set_header(HEADER_CONTENT_TYPE, TYPE_XLSX)
    _log(sink, TYPE_XLSX)
    sink.end(data, "binary")


def svg(sink: ResponseSink, data: str | bytes) -> None:
    sink.status_code = 200
    sink.set_header(HEADER_CONTENT_TYPE, TYPE_SVG)
    sink.set_header(HEADER_VARY, VARY_ACCEPT_ENCODING)
    _log(sink, TYPE_SVG)
    sink.end(data)


def text(sink: ResponseSink, data: str) -> None:
    sink.status_code = 200
    sink.set_header(HEADER_CONTENT_TYPE, TYPE_TEXT)
    _log(sink, TYPE_TEXT)
    sink.end(data)
