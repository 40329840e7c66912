"""Settings and JSON log output."""

from __future__ import annotations

import io
import json
import logging

import pytest

from replykit import config, formatter
from replykit.logging import JsonFormatter, configure_logging


@pytest.fixture(autouse=True)
def _fresh_settings():
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


def test_settings_defaults(monkeypatch) -> None:
    monkeypatch.delenv("REPLYKIT_LOG_LEVEL", raising=False)
    monkeypatch.delenv("REPLYKIT_EXPOSE_ERROR_DETAIL", raising=False)
    settings = config.get_settings()
    assert settings.log_level == "INFO"
    assert settings.expose_error_detail is False


def test_settings_from_env(monkeypatch) -> None:
    monkeypatch.setenv("replykit_log_level", "debug")
    assert config.get_settings().log_level == "debug"


def test_json_formatter_includes_extras() -> None:
    record = logging.LogRecord("replykit.formatter", logging.DEBUG, __file__, 1, "response_formatted", None, None)
    record.status_code = 404
    record.request_id = "req-1"

    payload = json.loads(JsonFormatter().format(record))
    assert payload.pop("time").endswith("+00:00")
    assert payload == {
        "level": "DEBUG",
        "message": "response_formatted",
        "logger": "replykit.formatter",
        "request_id": "req-1",
        "status_code": 404,
    }


@pytest.fixture
def library_logger():
    logger = logging.getLogger("replykit")
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in saved_handlers:
        logger.addHandler(handler)
    logger.setLevel(saved_level)


def test_configure_logging_uses_settings_level(monkeypatch, library_logger) -> None:
    monkeypatch.setenv("REPLYKIT_LOG_LEVEL", "warning")
    root_handlers = list(logging.getLogger().handlers)

    assert configure_logging() is library_logger
    assert library_logger.level == logging.WARNING
    assert logging.getLogger().handlers == root_handlers


def test_configure_logging_replaces_only_its_own_handler(library_logger) -> None:
    app_handler = logging.NullHandler()
    library_logger.addHandler(app_handler)

    configure_logging(io.StringIO(), level="debug")
    configure_logging(io.StringIO(), level="debug")

    json_handlers = [h for h in library_logger.handlers if isinstance(h.formatter, JsonFormatter)]
    assert len(json_handlers) == 1
    assert app_handler in library_logger.handlers


def test_helper_output_is_json_lines(buffer, library_logger) -> None:
    stream = io.StringIO()
    configure_logging(stream, level="debug")

    formatter.not_found(buffer)

    line = json.loads(stream.getvalue().splitlines()[-1])
    assert line["logger"] == "replykit.formatter"
    assert line["message"] == "response_formatted"
    assert line["status_code"] == 404


def test_helpers_log_status_code(buffer, caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="replykit.formatter"):
        formatter.text(buffer, "hello")

    record = next(r for r in caplog.records if r.getMessage() == "response_formatted")
    assert record.status_code == 200
    assert record.content_type == "text/plain"
