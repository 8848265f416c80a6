from typing import Optional

from anthropic_api.models.catalog import ModelInfo, ModelList
from anthropic_api.models.common import ListParams
from anthropic_api.resources.base import Resource, path_segment


class Models(Resource):
    """Model catalog: GET /v1/models and /v1/models/{model_id}"""

    async def list(
        self,
        *,
        before_id: Optional[str] = None,
        after_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> ModelList:
        """List available models, most recently released first."""
        params = ListParams(before_id=before_id, after_id=after_id, limit=limit)
        return await self._get("models", ModelList, params.to_query())

    async def retrieve(self, model_id: str) -> ModelInfo:
        """Get one model by ID or alias."""
        return await self._get(f"models/{path_segment(model_id)}", ModelInfo)
