from typing import Literal

from pydantic import BaseModel

from anthropic_api.models.common import Page


class ModelInfo(BaseModel):
    """A model available through the API"""
    id: str
    display_name: str
    created_at: str  # RFC 3339 release timestamp
    type: Literal["model"] = "model"


ModelList = Page[ModelInfo]
