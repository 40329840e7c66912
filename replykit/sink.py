"""
Response sink protocol and an in-memory implementation backed by FastAPI.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from fastapi.responses import Response

from .constants import HEADER_CONTENT_TYPE, TYPE_HTML, TYPE_JSON, TYPE_OCTET_STREAM
from .errors import ResponseAlreadySentError, ResponseNotFinalizedError

_BINARY_ENCODINGS = {"binary", "latin1", "latin-1"}


@runtime_checkable
class ResponseSink(Protocol):
    """The capabilities the formatter needs from an in-flight response."""

    status_code: int

    def set_header(self, name: str, value: str) -> None: ...

    def send(self, body: Any = None) -> None: ...

    def end(self, body: str | bytes | None = None, encoding: Optional[str] = None) -> None: ...


def encode_body(body: str | bytes | bytearray | None, encoding: Optional[str] = None) -> bytes:
    """Turn a raw body into bytes without any serialization."""

    if body is None:
        return b""
    if isinstance(body, (bytes, bytearray)):
        return bytes(body)
    if encoding and encoding.lower() in _BINARY_ENCODINGS:
        # One byte per character; code points above 0xFF keep their low byte.
        return bytes(ord(char) & 0xFF for char in body)
    return body.encode(encoding or "utf-8")


class ResponseBuffer:
    """Sink that records one response and renders it as a FastAPI ``Response``.

    ``send`` serializes: bytes pass through, strings are UTF-8 text and any
    other value is written as compact JSON. A default ``Content-Type`` is
    filled in only when none was set. ``end`` writes the body as given.
    Either one finalizes the buffer; any later write raises
    :class:`ResponseAlreadySentError`.
    """

    def __init__(self) -> None:
        self._status_code = 200
        self._headers: Dict[str, tuple[str, str]] = {}
        self.body: bytes = b""
        self.finalized = False

    @property
    def status_code(self) -> int:
        return self._status_code

    @status_code.setter
    def status_code(self, value: int) -> None:
        self._ensure_open()
        self._status_code = value

    @property
    def headers(self) -> Dict[str, str]:
        return {name: value for name, value in self._headers.values()}

    def get_header(self, name: str) -> Optional[str]:
        entry = self._headers.get(name.lower())
        return entry[1] if entry else None

    def set_header(self, name: str, value: str) -> None:
        self._ensure_open()
        self._headers[name.lower()] = (name, str(value))

    def send(self, body: Any = None) -> None:
        self._ensure_open()
        if body is None:
            payload = b""
        elif isinstance(body, (bytes, bytearray)):
            self._default_content_type(TYPE_OCTET_STREAM)
            payload = bytes(body)
        elif isinstance(body, str):
            self._default_content_type(TYPE_HTML)
            payload = body.encode("utf-8")
        else:
            self._default_content_type(TYPE_JSON)
            payload = json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        self._finalize(payload)

    def end(self, body: str | bytes | None = None, encoding: Optional[str] = None) -> None:
        self._ensure_open()
        self._finalize(encode_body(body, encoding))

    def to_response(self) -> Response:
        """Render the recorded status, headers and body."""

        if not self.finalized:
            raise ResponseNotFinalizedError("Response has not been sent")
        return Response(content=self.body, status_code=self._status_code, headers=self.headers)

    def _default_content_type(self, media_type: str) -> None:
        if self.get_header(HEADER_CONTENT_TYPE) is None:
            self.set_header(HEADER_CONTENT_TYPE, media_type)

    def _finalize(self, payload: bytes) -> None:
        self.body = payload
        self.finalized = True

    def _ensure_open(self) -> None:
        if self.finalized:
            raise ResponseAlreadySentError("Response has already been sent")
