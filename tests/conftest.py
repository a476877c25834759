"""Pytest configuration and shared fixtures."""

import logging
import sys
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

# Add src to Python path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from utils.config import reset_config  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Give each test a config built from defaults only."""
    for var in (
        "APP_LOG_LEVEL",
        "APP_LOG_TO_FILE",
        "LOOKUP_IP_ECHO_URL",
        "LOOKUP_GEO_BASE_URL",
        "LOOKUP_PASS_TIMES_URL",
        "LOOKUP_PASS_COUNT",
        "LOOKUP_REQUEST_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def restore_root_logger():
    """Put root logger handlers and level back after setup_logging tests."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def hosts(self) -> list[str]:
        return [request.url.host for request in self.requests]


@pytest.fixture
def make_http_client():
    """Build an ``httpx.AsyncClient`` answering from per-host responders.

    Each responder is an ``httpx.Response`` or a callable taking the request.
    """

    def factory(routes: dict) -> tuple[httpx.AsyncClient, RecordingTransport]:
        def handler(request: httpx.Request) -> httpx.Response:
            responder = routes.get(request.url.host)
            if responder is None:
                return httpx.Response(404, text=f"no route for {request.url.host}")
            if callable(responder):
                return responder(request)
            return responder

        transport = RecordingTransport(handler)
        return httpx.AsyncClient(transport=transport), transport

    return factory
