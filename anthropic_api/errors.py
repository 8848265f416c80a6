"""
Exception types raised by the client.

Usage:
    from anthropic_api.errors import APIError, APIConnectionError

    try:
        response = await client.messages.create(request)
    except APIError as e:
        print(e.error_type, e.message)
    except APIConnectionError:
        ...

Three failure kinds are kept apart:
- APIConnectionError: the request never produced a response (connect, TLS, timeout, read).
- ResponseDecodeError: a response arrived but did not match the wire schema.
- APIError: the server answered with an error envelope.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from anthropic_api.models.common import ErrorResponse


class AnthropicError(Exception):
    """Base class for all client errors."""


class ConfigurationError(AnthropicError):
    """Missing or invalid client configuration."""


class APIConnectionError(AnthropicError):
    """Transport-level failure talking to the API."""


class ResponseDecodeError(AnthropicError):
    """A response body or stream frame could not be decoded.

    The offending text is kept on ``raw`` for diagnosis.
    """

    def __init__(self, message: str, raw: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.raw = raw
        self.status_code = status_code

    def __str__(self) -> str:
        preview = self.raw if len(self.raw) <= 200 else self.raw[:200] + "..."
        return f"{self.args[0]} (raw={preview!r})"


class APIError(AnthropicError):
    """Error envelope returned by the server: ``{"type": "error", "error": {...}}``."""

    def __init__(
        self,
        error_type: str,
        message: str,
        status_code: Optional[int] = None,
        response: Optional["ErrorResponse"] = None,
    ):
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.error_type} ({self.status_code}): {self.message}"
        return f"{self.error_type}: {self.message}"
