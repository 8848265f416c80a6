"""
Wire schema for the Messages endpoint (POST /v1/messages).

Request side: MessagesRequest and the message/content/tool types it carries.
Response side: MessagesResponse and its content blocks.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from anthropic_api.models.common import Usage


# ============================================================================
# Content Blocks
# ============================================================================


class TextBlock(BaseModel):
    """Text content block"""
    type: Literal["text"] = "text"
    text: str


class ToolUseBlock(BaseModel):
    """A model-issued request to invoke a caller-defined tool"""
    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: Any = Field(default_factory=dict)


class ThinkingBlock(BaseModel):
    """Extended thinking trace. The signature arrives late when streaming."""
    type: Literal["thinking"] = "thinking"
    thinking: str
    signature: str = ""


class RedactedThinkingBlock(BaseModel):
    type: Literal["redacted_thinking"] = "redacted_thinking"
    data: str


class ImageSource(BaseModel):
    """Image source with base64 data"""
    type: Literal["base64"] = "base64"
    media_type: str  # e.g., "image/jpeg", "image/png"
    data: str  # Base64-encoded image data (without data URL prefix)


class ImageBlock(BaseModel):
    """Image content part of a multimodal message"""
    type: Literal["image"] = "image"
    source: ImageSource


class ToolResultBlock(BaseModel):
    """Result of a tool invocation, sent back in a user message"""
    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str
    content: Optional[Union[str, List[Union[TextBlock, ImageBlock]]]] = None
    is_error: Optional[bool] = None


ContentBlock = Annotated[
    Union[TextBlock, ToolUseBlock, ThinkingBlock, RedactedThinkingBlock],
    Field(discriminator="type"),
]

RequestContentBlock = Annotated[
    Union[
        TextBlock,
        ImageBlock,
        ToolUseBlock,
        ToolResultBlock,
        ThinkingBlock,
        RedactedThinkingBlock,
    ],
    Field(discriminator="type"),
]

CONTENT_BLOCK_TYPES = frozenset({"text", "tool_use", "thinking", "redacted_thinking"})


# ============================================================================
# Request
# ============================================================================


class Message(BaseModel):
    """Message with either text-only (string) or multimodal (array) content"""
    role: str = Field(..., pattern="^(user|assistant)$")
    content: Union[str, List[RequestContentBlock]]

    @classmethod
    def user(cls, content: Union[str, List[Any]]) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: Union[str, List[Any]]) -> "Message":
        return cls(role="assistant", content=content)


class Tool(BaseModel):
    """Tool definition; input_schema is an arbitrary JSON Schema value"""
    name: str
    description: str
    input_schema: Any


class ToolChoiceAuto(BaseModel):
    type: Literal["auto"] = "auto"


class ToolChoiceAny(BaseModel):
    type: Literal["any"] = "any"


class ToolChoiceTool(BaseModel):
    type: Literal["tool"] = "tool"
    name: str


class ToolChoiceNone(BaseModel):
    type: Literal["none"] = "none"


ToolChoice = Annotated[
    Union[ToolChoiceAuto, ToolChoiceAny, ToolChoiceTool, ToolChoiceNone],
    Field(discriminator="type"),
]


class Metadata(BaseModel):
    user_id: Optional[str] = None


class Thinking(BaseModel):
    """Extended thinking configuration.

    budget_tokens must be at least 1024 and below max_tokens when enabled.
    """
    type: Literal["enabled", "disabled"] = "enabled"
    budget_tokens: Optional[int] = Field(default=None, ge=1024)

    @model_validator(mode="after")
    def _budget_when_enabled(self) -> "Thinking":
        if self.type == "enabled" and self.budget_tokens is None:
            raise ValueError("budget_tokens is required when thinking is enabled")
        return self


class MessagesRequest(BaseModel):
    """Request body for the Messages endpoint.

    Only model, messages and max_tokens are required; every other field is
    left out of the JSON body unless set.

    Example:
        request = MessagesRequest(
            model="claude-3-7-sonnet-20250219",
            messages=[Message.user("Hello, Claude!")],
            max_tokens=1024,
            temperature=0.2,
        )
    """
    model: str
    messages: List[Message]
    max_tokens: int = Field(ge=1)
    metadata: Optional[Metadata] = None
    stop_sequences: Optional[List[str]] = None
    stream: Optional[bool] = None
    system: Optional[str] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    thinking: Optional[Thinking] = None
    tool_choice: Optional[ToolChoice] = None
    tools: Optional[List[Tool]] = None
    top_k: Optional[int] = Field(default=None, ge=0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    @field_validator("tool_choice", mode="before")
    @classmethod
    def _coerce_tool_choice(cls, value: Any) -> Any:
        # Allow the bare policy names: "auto", "any", "none"
        if isinstance(value, str):
            return {"type": value}
        return value


# ============================================================================
# Response
# ============================================================================


class MessagesResponse(BaseModel):
    """Complete (non-streaming) response from the Messages endpoint"""
    id: str
    model: str
    role: Literal["assistant"] = "assistant"
    content: List[ContentBlock]
    stop_reason: Optional[str] = None
    stop_sequence: Optional[str] = None
    type: Literal["message"] = "message"
    usage: Usage

    @property
    def text(self) -> str:
        """Concatenated text of all text blocks."""
        return "".join(block.text for block in self.content if isinstance(block, TextBlock))

    @property
    def tool_uses(self) -> List[ToolUseBlock]:
        return [block for block in self.content if isinstance(block, ToolUseBlock)]
