from typing import Any, Dict, Optional, Type, TypeVar
from urllib.parse import quote

from pydantic import BaseModel

from anthropic_api.transport import HttpTransport

M = TypeVar("M", bound=BaseModel)


def path_segment(value: str) -> str:
    """Percent-encode an identifier for use as a single route segment."""
    return quote(value, safe="")


class Resource:
    """Base class for endpoint groups sharing one HttpTransport."""

    def __init__(self, transport: HttpTransport):
        self._transport = transport

    async def _get(
        self, route: str, response_model: Type[M], params: Optional[Dict[str, Any]] = None
    ) -> M:
        return await self._transport.request_json("GET", route, response_model, params=params)

    async def _post(self, route: str, response_model: Type[M], body: Optional[BaseModel] = None) -> M:
        return await self._transport.request_json("POST", route, response_model, body=body)

    async def _delete(self, route: str, response_model: Type[M]) -> M:
        return await self._transport.request_json("DELETE", route, response_model)
