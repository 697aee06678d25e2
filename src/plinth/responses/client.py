"""Responses API client: one typed round trip per call."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, overload

from plinth.config import Settings
from plinth.logging import configure_logger, event_logger
from plinth.responses.codec import decode, encode
from plinth.responses.errors import InvalidArgument
from plinth.responses.transport import HttpResponsesTransport, ResponsesTransport
from plinth.responses.types import CreateResponseRequest, Response

RESPONSES_PATH = "/responses"

T = TypeVar("T")


class ResponsesClient:
    """Async client that submits requests to ``POST /responses``.

    The client holds no per-call state; concurrent calls need no coordination.
    Conversation continuity is the caller's job via ``previous_response_id``.
    """

    def __init__(self, transport: ResponsesTransport, *, logger: logging.Logger | None = None) -> None:
        self._transport = transport
        self._logger = logger

    @classmethod
    def from_settings(cls, settings: Settings, *, logger: logging.Logger | None = None) -> ResponsesClient:
        """Build a client over httpx; without ``logger`` the plinth file logger is used."""

        if not settings.api_key:
            raise InvalidArgument("api_key is required; set OPENAI_API_KEY or [auth].api_key")
        if logger is None:
            logger = configure_logger(log_level=settings.log_level)

        transport = HttpResponsesTransport(
            settings.api_key,
            base_url=settings.base_url,
            organization=settings.organization,
            project=settings.project,
            timeout=settings.timeout,
            user_agent=settings.user_agent,
            logger=event_logger(logger),
        )
        return cls(transport, logger=logger)

    async def create(self, request: CreateResponseRequest) -> Response:
        """Create a model response.

        Raises InvalidArgument when ``stream`` is set, before any network I/O;
        SchemaMismatch when the reply cannot be decoded; transport errors
        propagate unchanged.
        """

        if request.stream:
            raise InvalidArgument("stream=True is not supported by create; use a streaming transport")

        payload = encode(request)
        if self._logger:
            self._logger.debug(
                "create response model=%s tools=%d previous_response_id=%s",
                request.model,
                len(request.tools or ()),
                request.previous_response_id,
            )
        data = await self._transport.post(RESPONSES_PATH, payload)
        response = decode(Response, data)
        if self._logger:
            self._logger.debug("response %s status=%s", response.id, response.status)
        return response

    @overload
    async def create_raw(self, body: Any) -> Any: ...

    @overload
    async def create_raw(self, body: Any, response_type: type[T]) -> T: ...

    async def create_raw(self, body: Any, response_type: Any | None = None) -> Any:
        """Send an untyped body and return the raw reply or ``response_type``.

        No streaming guard applies here: the caller must keep ``stream`` unset
        or false in ``body``.
        """

        payload = encode(body)
        data = await self._transport.post(RESPONSES_PATH, payload)
        if response_type is None:
            return data
        return decode(response_type, data)


__all__ = ["RESPONSES_PATH", "ResponsesClient"]
