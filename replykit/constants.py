"""
Header names and media types written by the formatter.
"""

from __future__ import annotations

from typing import Final

HEADER_CONTENT_TYPE: Final = "Content-Type"
HEADER_CONTENT_DISPOSITION: Final = "Content-Disposition"
HEADER_LOCATION: Final = "Location"
HEADER_VARY: Final = "Vary"

TYPE_JSON: Final = "application/json; charset=utf-8"
TYPE_XLSX: Final = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
TYPE_SVG: Final = "image/svg+xml"
TYPE_TEXT: Final = "text/plain"
TYPE_HTML: Final = "text/html; charset=utf-8"
TYPE_OCTET_STREAM: Final = "application/octet-stream"

VARY_ACCEPT_ENCODING: Final = "Accept-Encoding"
