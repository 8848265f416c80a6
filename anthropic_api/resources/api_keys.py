from typing import Optional

from anthropic_api.models.admin import (
    ApiKey,
    ApiKeyList,
    ApiKeyListParams,
    ApiKeyStatus,
    ApiKeyUpdate,
)
from anthropic_api.resources.base import Resource, path_segment

API_KEYS_ROUTE = "organizations/api_keys"


class ApiKeys(Resource):
    async def list(
        self,
        *,
        before_id: Optional[str] = None,
        after_id: Optional[str] = None,
        limit: Optional[int] = None,
        status: Optional[ApiKeyStatus] = None,
        workspace_id: Optional[str] = None,
        created_by_user_id: Optional[str] = None,
    ) -> ApiKeyList:
        params = ApiKeyListParams(
            before_id=before_id,
            after_id=after_id,
            limit=limit,
            status=status,
            workspace_id=workspace_id,
            created_by_user_id=created_by_user_id,
        )
        return await self._get(API_KEYS_ROUTE, ApiKeyList, params.to_query())

    async def retrieve(self, api_key_id: str) -> ApiKey:
        return await self._get(f"{API_KEYS_ROUTE}/{path_segment(api_key_id)}", ApiKey)

    async def update(
        self,
        api_key_id: str,
        *,
        name: Optional[str] = None,
        status: Optional[ApiKeyStatus] = None,
    ) -> ApiKey:
        """Rename a key or change its status. Unset fields are left unchanged."""
        body = ApiKeyUpdate(name=name, status=status)
        return await self._post(f"{API_KEYS_ROUTE}/{path_segment(api_key_id)}", ApiKey, body)
