import logging
import pathlib
import sys
from typing import Any

import httpx
import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"

# Ensure src/ is importable when running tests without installing the package.
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from plinth.responses.transport import MockResponsesTransport  # noqa: E402
from plinth.responses.types import CreateResponseRequest  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_plinth_home(monkeypatch: pytest.MonkeyPatch, tmp_path: pathlib.Path):
    """Point PLINTH_HOME at a per-test sandbox so we never touch the real FS."""

    home = tmp_path / "plinth-home"
    home.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("PLINTH_HOME", str(home))
    yield home

    plinth_logger = logging.getLogger("plinth")
    for handler in list(plinth_logger.handlers):
        plinth_logger.removeHandler(handler)
        handler.close()
    plinth_logger.setLevel(logging.NOTSET)
    plinth_logger.propagate = True


# ============================================================================
# Transport Fixtures
# ============================================================================


class ErrorTransport:
    """Transport that raises the configured exception on every call."""

    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls = 0

    async def post(self, path: str, body: Any) -> Any:
        self.calls += 1
        raise self.error


class EchoIdTransport:
    """Transport that answers every call with a fixed minimal response."""

    def __init__(self, response_id: str = "resp_123") -> None:
        self.response_id = response_id
        self.payloads: list[Any] = []

    async def post(self, path: str, body: Any) -> Any:
        self.payloads.append(body)
        return {"id": self.response_id, "output": []}


@pytest.fixture
def mock_responses_transport():
    """Factory fixture for MockResponsesTransport returning a fixed body."""
    return MockResponsesTransport


@pytest.fixture
def error_transport_factory():
    """Factory fixture for transports that raise a given exception."""
    return ErrorTransport


@pytest.fixture
def echo_transport():
    """Factory fixture for a transport echoing ``{"id": ..., "output": []}``."""
    return EchoIdTransport


@pytest.fixture
def request_factory():
    """Factory fixture for minimal CreateResponseRequest instances."""

    def _factory(**overrides: Any) -> CreateResponseRequest:
        values: dict[str, Any] = {"model": "gpt-4.1-mini", "input": "hi"}
        values.update(overrides)
        return CreateResponseRequest(**values)

    return _factory


# ============================================================================
# HTTP Fixtures
# ============================================================================


@pytest.fixture
def mock_http_handler():
    """Factory fixture for creating httpx request handlers with custom responses."""

    def _handler(
        status_code: int = 200,
        json_body: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
        record_request: dict[str, Any] | None = None,
    ):
        def handler(request: httpx.Request) -> httpx.Response:
            if record_request is not None:
                record_request["headers"] = request.headers
                record_request["url"] = str(request.url)
                record_request["content"] = request.content
            if text is not None:
                return httpx.Response(status_code, text=text, headers=headers or {}, request=request)
            return httpx.Response(status_code, json=json_body, headers=headers or {}, request=request)

        return handler

    return _handler


@pytest.fixture
def mock_http_client(mock_http_handler):
    """Fixture factory that provides an httpx.AsyncClient with MockTransport."""

    def _client(handler=None):
        if handler is None:
            handler = mock_http_handler(json_body={"id": "resp_1", "output": []})
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _client
