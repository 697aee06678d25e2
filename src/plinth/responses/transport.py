"""Transport abstraction for the Responses client."""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from typing import Any, Protocol

import httpx
import openai
from openai import AsyncOpenAI

from plinth import __version__
from plinth.responses.errors import (
    ApiAuthError,
    ApiClientError,
    ApiRateLimitError,
    ApiServerError,
    ApiTimeoutError,
    TransportError,
)

EventLogger = Callable[[str, dict[str, object]], None]


class ResponsesTransport(Protocol):
    """Protocol for single-shot JSON round trips against the API."""

    async def post(self, path: str, body: Any) -> Any:
        """POST ``body`` as JSON to ``path`` and return the decoded JSON reply."""


DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT = httpx.Timeout(60.0, connect=5.0)
DEFAULT_USER_AGENT = f"plinth/{__version__}"


class HttpResponsesTransport:
    """httpx-based transport for the real Responses API."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        organization: str | None = None,
        project: str | None = None,
        timeout: httpx.Timeout | float | None = None,
        client: httpx.AsyncClient | None = None,
        user_agent: str | None = DEFAULT_USER_AGENT,
        logger: EventLogger | None = None,
    ) -> None:
        if not api_key.strip():
            raise ValueError("api_key cannot be empty")

        self.api_key = api_key.strip()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or DEFAULT_TIMEOUT
        self._organization = organization
        self._project = project
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self.timeout)
        self._user_agent = user_agent
        self._logger = logger

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        if self._organization:
            headers["OpenAI-Organization"] = self._organization
        if self._project:
            headers["OpenAI-Project"] = self._project
        return headers

    async def post(self, path: str, body: Any) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        start = time.perf_counter()
        try:
            response = await self._client.post(url, json=body, headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise ApiTimeoutError("request timed out") from exc
        except httpx.HTTPStatusError as exc:
            raise map_status_error(exc.response.status_code, exc.response.text, exc.response.headers) from exc
        except httpx.RequestError as exc:
            raise ApiClientError("request failed") from exc

        if self._logger:
            self._logger(
                "response_complete",
                {
                    "status": response.status_code,
                    "request_id": response.headers.get("x-request-id"),
                    "duration_sec": time.perf_counter() - start,
                    "base_url": self.base_url,
                },
            )
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"response body is not JSON (status {response.status_code})") from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpResponsesTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


class MockResponsesTransport:
    """In-memory transport that returns a predefined body for tests/offline mode."""

    def __init__(
        self,
        body: Any = None,
        status_code: int = 200,
        logger: EventLogger | None = None,
    ) -> None:
        self._body = body
        self.status_code = status_code
        self._logger = logger
        self.calls = 0
        self.last_path: str | None = None
        self.last_payload: Any = None

    async def post(self, path: str, body: Any) -> Any:
        self.calls += 1
        self.last_path = path
        self.last_payload = body
        if self.status_code >= 400:
            raise map_status_error(self.status_code, "", {})
        if self._logger:
            self._logger(
                "response_complete",
                {"status": self.status_code, "request_id": None, "duration_sec": 0.0, "base_url": "mock://"},
            )
        return self._body


class OpenAISDKResponsesTransport:
    """Transport backed by the official openai Python SDK's generic ``post``."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | None = None,
        organization: str | None = None,
        project: str | None = None,
        timeout: float | None = None,
        client: Any | None = None,
    ) -> None:
        if not api_key.strip():
            raise ValueError("api_key cannot be empty")

        self._owns_client = client is None
        self._client = client or AsyncOpenAI(
            api_key=api_key.strip(),
            base_url=base_url,
            organization=organization,
            project=project,
            timeout=timeout,
            max_retries=0,
        )

    async def post(self, path: str, body: Any) -> Any:
        try:
            response = await self._client.post(path, body=body, cast_to=httpx.Response)
        except openai.APITimeoutError as exc:
            raise ApiTimeoutError("request timed out") from exc
        except openai.APIStatusError as exc:
            raise map_status_error(exc.status_code, exc.response.text, exc.response.headers) from exc
        except openai.APIConnectionError as exc:
            raise ApiClientError("request failed") from exc
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"response body is not JSON (status {response.status_code})") from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.close()

    async def __aenter__(self) -> OpenAISDKResponsesTransport:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def map_status_error(status: int, body: str, headers: Mapping[str, str]) -> TransportError:
    """Map an HTTP status to the matching TransportError subclass."""

    suffix = f" body={body}" if body else ""
    retry_after = headers.get("retry-after")
    retry_suffix = f" (retry after {retry_after}s)" if retry_after else ""
    if status in (401, 403):
        return ApiAuthError(f"auth failed with status {status}{suffix}")
    if status == 429:
        return ApiRateLimitError(f"rate limited{retry_suffix}{suffix}")
    if status >= 500:
        return ApiServerError(f"server error {status}{suffix}")
    return ApiClientError(f"request failed with status {status}{suffix}")


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "HttpResponsesTransport",
    "MockResponsesTransport",
    "OpenAISDKResponsesTransport",
    "ResponsesTransport",
    "map_status_error",
]
