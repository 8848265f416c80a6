"""
Streaming event schema for POST /v1/messages with "stream": true.

Each SSE `data:` payload decodes into exactly one StreamEvent, tagged by `type`.

Two payload fields historically arrive without a reliable discriminant and are
resolved by an explicit rule rather than by field-order matching:

content_block_start.content_block
    `type` when present; otherwise `id` + `name` -> tool_use, `text` -> text,
    `thinking` -> thinking, `data` -> redacted_thinking.

content_block_delta.delta
    `type` when present; otherwise `partial_json` -> input_json_delta,
    `text` -> text_delta, `thinking` -> thinking_delta,
    `signature` -> signature_delta.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Discriminator, Field, Tag

from anthropic_api.models.common import DeltaUsage, Usage
from anthropic_api.models.messages import (
    RedactedThinkingBlock,
    TextBlock,
    ThinkingBlock,
    ToolUseBlock,
)


def content_block_kind(value: Any) -> Optional[str]:
    """Resolve the variant of a content_block_start block."""
    if not isinstance(value, dict):
        return getattr(value, "type", None)
    kind = value.get("type")
    if kind:
        return kind if isinstance(kind, str) else None
    if "id" in value and "name" in value:
        return "tool_use"
    if "text" in value:
        return "text"
    if "thinking" in value:
        return "thinking"
    if "data" in value:
        return "redacted_thinking"
    return None


def delta_kind(value: Any) -> Optional[str]:
    """Resolve the variant of a content_block_delta delta."""
    if not isinstance(value, dict):
        return getattr(value, "type", None)
    kind = value.get("type")
    if kind:
        return kind if isinstance(kind, str) else None
    if "partial_json" in value:
        return "input_json_delta"
    if "text" in value:
        return "text_delta"
    if "thinking" in value:
        return "thinking_delta"
    if "signature" in value:
        return "signature_delta"
    return None


ContentBlockStart = Annotated[
    Union[
        Annotated[TextBlock, Tag("text")],
        Annotated[ToolUseBlock, Tag("tool_use")],
        Annotated[ThinkingBlock, Tag("thinking")],
        Annotated[RedactedThinkingBlock, Tag("redacted_thinking")],
    ],
    Discriminator(content_block_kind),
]


# ============================================================================
# Deltas
# ============================================================================


class TextDelta(BaseModel):
    """Incremental text fragment"""
    type: Literal["text_delta"] = "text_delta"
    text: str


class InputJsonDelta(BaseModel):
    """Incremental fragment of a tool_use input JSON document"""
    type: Literal["input_json_delta"] = "input_json_delta"
    partial_json: str


class ThinkingDelta(BaseModel):
    type: Literal["thinking_delta"] = "thinking_delta"
    thinking: str


class SignatureDelta(BaseModel):
    type: Literal["signature_delta"] = "signature_delta"
    signature: str


ContentBlockDelta = Annotated[
    Union[
        Annotated[TextDelta, Tag("text_delta")],
        Annotated[InputJsonDelta, Tag("input_json_delta")],
        Annotated[ThinkingDelta, Tag("thinking_delta")],
        Annotated[SignatureDelta, Tag("signature_delta")],
    ],
    Discriminator(delta_kind),
]

DELTA_TYPES = frozenset({"text_delta", "input_json_delta", "thinking_delta", "signature_delta"})


# ============================================================================
# Events
# ============================================================================


class MessageStart(BaseModel):
    """Initial message information in a streaming response"""
    id: str
    model: str
    role: Literal["assistant"] = "assistant"
    content: List[ContentBlockStart] = Field(default_factory=list)
    type: Literal["message"] = "message"
    stop_reason: Optional[str] = None
    stop_sequence: Optional[str] = None
    usage: Optional[Usage] = None


class MessageDelta(BaseModel):
    """Final message information: why generation stopped"""
    stop_reason: Optional[str] = None
    stop_sequence: Optional[str] = None


class MessageStartEvent(BaseModel):
    type: Literal["message_start"] = "message_start"
    message: MessageStart


class ContentBlockStartEvent(BaseModel):
    type: Literal["content_block_start"] = "content_block_start"
    index: int = Field(ge=0)
    content_block: ContentBlockStart


class ContentBlockDeltaEvent(BaseModel):
    type: Literal["content_block_delta"] = "content_block_delta"
    index: int = Field(ge=0)
    delta: ContentBlockDelta


class ContentBlockStopEvent(BaseModel):
    type: Literal["content_block_stop"] = "content_block_stop"
    index: int = Field(ge=0)


class MessageDeltaEvent(BaseModel):
    type: Literal["message_delta"] = "message_delta"
    delta: MessageDelta
    usage: DeltaUsage


class MessageStopEvent(BaseModel):
    type: Literal["message_stop"] = "message_stop"


class PingEvent(BaseModel):
    """Keepalive; never delivered to stream consumers"""
    type: Literal["ping"] = "ping"


StreamEvent = Annotated[
    Union[
        MessageStartEvent,
        ContentBlockStartEvent,
        ContentBlockDeltaEvent,
        ContentBlockStopEvent,
        MessageDeltaEvent,
        MessageStopEvent,
        PingEvent,
    ],
    Field(discriminator="type"),
]

STREAM_EVENT_TYPES = frozenset(
    {
        "message_start",
        "content_block_start",
        "content_block_delta",
        "content_block_stop",
        "message_delta",
        "message_stop",
        "ping",
    }
)
