"""Error taxonomy for the Responses client."""

from __future__ import annotations


class ApiError(Exception):
    """Base class for API-related errors."""


class MissingRequiredField(ApiError):
    """A builder was finalized without one of its required fields."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"missing required field: {field_name}")
        self.field_name = field_name


class SchemaMismatch(ApiError):
    """A payload did not match any variant of the expected type."""

    def __init__(self, context: str) -> None:
        super().__init__(context)
        self.context = context


class InvalidArgument(ApiError):
    """Local precondition violation detected before any network I/O."""


class TransportError(ApiError):
    """Failure reported by the HTTP collaborator."""


class ApiAuthError(TransportError):
    """Authentication/authorization error."""


class ApiRateLimitError(TransportError):
    """Rate limit exceeded."""


class ApiTimeoutError(TransportError):
    """Network timeout."""


class ApiServerError(TransportError):
    """5xx server error."""


class ApiClientError(TransportError):
    """4xx client-side error not covered by other errors."""


__all__ = [
    "ApiAuthError",
    "ApiClientError",
    "ApiError",
    "ApiRateLimitError",
    "ApiServerError",
    "ApiTimeoutError",
    "InvalidArgument",
    "MissingRequiredField",
    "SchemaMismatch",
    "TransportError",
]
