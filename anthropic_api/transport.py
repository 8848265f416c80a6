import logging
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from anthropic_api.codec import (
    UnknownBlockPolicy,
    decode_response,
    encode_body,
    load_json,
    raise_for_error_envelope,
)
from anthropic_api.config import ANTHROPIC_VERSION, Credentials
from anthropic_api.errors import APIConnectionError, ResponseDecodeError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class HttpTransport:
    """Single-request HTTP primitive shared by every endpoint.

    Sends each request to credentials.base_url + route with the API key,
    protocol version and JSON content-type headers. Nothing is retried.
    """

    def __init__(
        self,
        credentials: Credentials,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        unknown_block_policy: UnknownBlockPolicy = UnknownBlockPolicy.ERROR,
    ):
        self.credentials = credentials
        self.unknown_block_policy = UnknownBlockPolicy(unknown_block_policy)
        self._client = httpx.AsyncClient(
            base_url=credentials.base_url,
            headers={
                "x-api-key": credentials.api_key,
                "anthropic-version": ANTHROPIC_VERSION,
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        route: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[BaseModel] = None,
    ) -> httpx.Response:
        """Send one request and return the raw response, whatever its status."""
        content = encode_body(body) if body is not None else None
        logger.debug(f"{method} {route} params={params}")
        try:
            return await self._client.request(method, route, params=params, content=content)
        except httpx.HTTPError as e:
            raise APIConnectionError(f"{method} {route} failed: {e}") from e

    async def request_json(
        self,
        method: str,
        route: str,
        response_model: Type[M],
        *,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[BaseModel] = None,
    ) -> M:
        """Send one request and decode the body into response_model."""
        response = await self.request(method, route, params=params, body=body)
        return decode_response(
            response.content,
            response_model,
            status_code=response.status_code,
            policy=self.unknown_block_policy,
        )

    async def open_stream(self, route: str, body: BaseModel) -> httpx.Response:
        """
        POST body and return the response with its event stream still unread.

        A non-2xx status is read and raised here, before any stream exists.
        The caller owns the returned response and must close it.

        Raises:
            APIConnectionError: connection could not be established
            APIError: server answered with an error envelope
            ResponseDecodeError: non-2xx status without an error envelope
        """
        request = self._client.build_request(
            "POST",
            route,
            content=encode_body(body),
            headers={"Accept": "text/event-stream"},
        )
        logger.debug(f"POST {route} (stream)")
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise APIConnectionError(f"POST {route} failed: {e}") from e

        if response.is_success:
            return response

        # Read error response body for better debugging
        try:
            raw = await response.aread()
        except httpx.HTTPError as e:
            raise APIConnectionError(f"Reading error body from {route} failed: {e}") from e
        finally:
            await response.aclose()

        logger.error(f"Stream request to {route} failed: status={response.status_code}")
        data = load_json(raw, response.status_code)
        raise_for_error_envelope(data, raw, response.status_code)
        raise ResponseDecodeError(
            f"HTTP {response.status_code} response without an error envelope",
            raw.decode("utf-8", errors="replace"),
            response.status_code,
        )

    async def cleanup(self):
        """Cleanup HTTP client resources."""
        await self._client.aclose()

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.cleanup()
