"""
Async client for the Anthropic API.

Usage:
    from anthropic_api import AnthropicClient, Credentials, Message, MessagesRequest

    async with AnthropicClient(Credentials.from_env()) as client:
        response = await client.messages.create(
            MessagesRequest(
                model="claude-3-7-sonnet-20250219",
                messages=[Message.user("Hello, Claude!")],
                max_tokens=1024,
            )
        )
        print(response.text)
"""

import logging
from typing import Optional

import httpx

from anthropic_api.codec import UnknownBlockPolicy
from anthropic_api.config import Credentials, Settings
from anthropic_api.resources import (
    ApiKeys,
    Invites,
    Messages,
    Models,
    Users,
    WorkspaceMembers,
    Workspaces,
)
from anthropic_api.transport import HttpTransport

logger = logging.getLogger(__name__)


class AnthropicClient:
    """Every endpoint group over one shared connection pool.

    The client holds no global state; credentials are passed in explicitly.
    """

    def __init__(
        self,
        credentials: Credentials,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        unknown_block_policy: UnknownBlockPolicy = UnknownBlockPolicy.ERROR,
    ):
        self._http = HttpTransport(
            credentials,
            timeout=timeout,
            transport=transport,
            unknown_block_policy=unknown_block_policy,
        )
        self.messages = Messages(self._http)
        self.models = Models(self._http)
        self.api_keys = ApiKeys(self._http)
        self.invites = Invites(self._http)
        self.users = Users(self._http)
        self.workspaces = Workspaces(self._http)
        self.workspace_members = WorkspaceMembers(self._http)
        logger.debug(f"Client created for {credentials.base_url}")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "AnthropicClient":
        """Build a client from ANTHROPIC_* settings (environment or .env)."""
        settings = settings or Settings()
        kwargs.setdefault("timeout", settings.timeout)
        return cls(Credentials.from_settings(settings), **kwargs)

    @property
    def credentials(self) -> Credentials:
        return self._http.credentials

    async def cleanup(self):
        """Close the underlying HTTP client."""
        await self._http.cleanup()

    async def __aenter__(self) -> "AnthropicClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.cleanup()
