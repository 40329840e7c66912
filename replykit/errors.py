"""
Exception types raised by response sinks and route code.
"""

from __future__ import annotations


class ReplykitError(Exception):
    """Base class for library errors."""


class ResponseAlreadySentError(ReplykitError):
    """Raised when a finalized response is written to again."""


class ResponseNotFinalizedError(ReplykitError):
    """Raised when a response is rendered before send/end was called."""


class JsonErrorResponse(ReplykitError):
    """Raised by route code to reply with a structured JSON error body.

    ``message_key`` and ``err_key`` are translation keys; they are passed to
    the client untouched.
    """

    def __init__(
        self,
        message_key: str,
        err_key: str,
        error_message: str,
        *,
        status_code: int = 500,
    ) -> None:
        self.message_key = message_key
        self.err_key = err_key
        self.error_message = error_message
        self.status_code = status_code
        super().__init__(error_message)
