"""
Helpers for formatting common HTTP responses onto a response sink.
"""

from .errors import (
    JsonErrorResponse,
    ReplykitError,
    ResponseAlreadySentError,
    ResponseNotFinalizedError,
)
from .formatter import (
    error,
    excel,
    is_present,
    json,
    json_error,
    json_error_response,
    not_found,
    redirect,
    svg,
    text,
    unauthorized,
)
from .sink import ResponseBuffer, ResponseSink

__all__ = [
    "JsonErrorResponse",
    "ReplykitError",
    "ResponseAlreadySentError",
    "ResponseBuffer",
    "ResponseNotFinalizedError",
    "ResponseSink",
    "error",
    "excel",
    "is_present",
    "json",
    "json_error",
    "json_error_response",
    "not_found",
    "redirect",
    "svg",
    "text",
    "unauthorized",
]
