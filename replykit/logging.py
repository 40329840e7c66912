"""
JSON-lines logging for the ``replykit`` logger tree.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Optional

from .config import get_settings

LOGGER_NAME = "replykit"

# Fields the helpers and handlers pass through ``extra``.
RESPONSE_FIELDS = ("request_id", "status_code", "content_type")


class JsonFormatter(logging.Formatter):
    """Render a log record as one JSON object.

    Response fields are included only when the record carries them.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            {field: getattr(record, field) for field in RESPONSE_FIELDS if getattr(record, field, None) is not None}
        )

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(stream: Optional[IO[str]] = None, level: Optional[str] = None) -> logging.Logger:
    """Attach a JSON handler to the ``replykit`` logger and return it.

    ``level`` defaults to ``Settings.log_level``. Calling this again replaces
    the handler it installed earlier; handlers added by the application are
    left alone.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel((level or get_settings().log_level).upper())

    for existing in list(logger.handlers):
        if isinstance(existing.formatter, JsonFormatter):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger
