from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

if TYPE_CHECKING:  # pragma: no cover - hints only
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from replykit.sink import ResponseBuffer


class RecordingSink:
    """Duck-typed sink that records every call in order."""

    def __init__(self) -> None:
        self.status_code = 0
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def set_header(self, name: str, value: str) -> None:
        self.calls.append(("set_header", (name, value)))

    def send(self, body: Any = None) -> None:
        self.calls.append(("send", (self.status_code, body)))

    def end(self, body: Any = None, encoding: Optional[str] = None) -> None:
        self.calls.append(("end", (self.status_code, body, encoding)))

    @property
    def terminal_calls(self) -> List[Tuple[str, Tuple[Any, ...]]]:
        return [call for call in self.calls if call[0] in {"send", "end"}]


@pytest.fixture
def recorder() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def buffer() -> ResponseBuffer:
    from replykit.sink import ResponseBuffer

    return ResponseBuffer()


@pytest.fixture
def make_client(
    monkeypatch: pytest.MonkeyPatch,
) -> Iterator[Callable[..., TestClient]]:
    """Factory fixture building a TestClient around an app with handlers registered."""

    def factory(add_routes: Callable[[FastAPI], None], env: dict[str, str] | None = None) -> TestClient:
        from fastapi import FastAPI
        from fastapi.testclient import TestClient

        from replykit import config as replykit_config
        from replykit.handlers import register_exception_handlers

        for key, value in (env or {}).items():
            monkeypatch.setenv(key, value)
        replykit_config.get_settings.cache_clear()

        app = FastAPI()
        register_exception_handlers(app)
        add_routes(app)
        return TestClient(app, raise_server_exceptions=False)

    yield factory
    from replykit import config as replykit_config

    replykit_config.get_settings.cache_clear()
