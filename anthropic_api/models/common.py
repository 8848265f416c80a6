from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Usage(BaseModel):
    """Token usage for a request and its response"""
    input_tokens: int
    output_tokens: int
    cache_creation_input_tokens: Optional[int] = None
    cache_read_input_tokens: Optional[int] = None


class DeltaUsage(BaseModel):
    """Cumulative usage carried by a message_delta stream event.

    The server only guarantees output_tokens here.
    """
    output_tokens: int
    input_tokens: Optional[int] = None
    cache_creation_input_tokens: Optional[int] = None
    cache_read_input_tokens: Optional[int] = None


class ErrorDetail(BaseModel):
    type: str  # e.g. "invalid_request_error", "overloaded_error"
    message: str


class ErrorResponse(BaseModel):
    """Error envelope: {"type": "error", "error": {"type": ..., "message": ...}}"""
    type: Literal["error"] = "error"
    error: ErrorDetail


class Page(BaseModel, Generic[T]):
    """One page of a cursor-paginated list endpoint"""
    data: List[T]
    first_id: Optional[str] = None
    last_id: Optional[str] = None
    has_more: bool = False


class ListParams(BaseModel):
    """Cursor pagination query parameters.

    before_id and after_id are independent; when both are set they are both
    forwarded and the server decides how to combine them.
    """
    before_id: Optional[str] = None
    after_id: Optional[str] = None
    limit: Optional[int] = Field(default=None, ge=1, le=1000)

    def to_query(self) -> Dict[str, Any]:
        """Render as query parameters, omitting unset values."""
        return self.model_dump(mode="json", exclude_none=True)
