from anthropic_api.models.common import (
    DeltaUsage,
    ErrorDetail,
    ErrorResponse,
    ListParams,
    Page,
    Usage,
)
from anthropic_api.models.catalog import ModelInfo, ModelList
from anthropic_api.models.messages import (
    ContentBlock,
    ImageBlock,
    ImageSource,
    Message,
    MessagesRequest,
    MessagesResponse,
    Metadata,
    RedactedThinkingBlock,
    TextBlock,
    Thinking,
    ThinkingBlock,
    Tool,
    ToolChoice,
    ToolChoiceAny,
    ToolChoiceAuto,
    ToolChoiceNone,
    ToolChoiceTool,
    ToolResultBlock,
    ToolUseBlock,
)
from anthropic_api.models.streaming import (
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    ContentBlockStopEvent,
    InputJsonDelta,
    MessageDelta,
    MessageDeltaEvent,
    MessageStart,
    MessageStartEvent,
    MessageStopEvent,
    PingEvent,
    SignatureDelta,
    StreamEvent,
    TextDelta,
    ThinkingDelta,
)

__all__ = [
    "ContentBlock",
    "ContentBlockDeltaEvent",
    "ContentBlockStartEvent",
    "ContentBlockStopEvent",
    "DeltaUsage",
    "ErrorDetail",
    "ErrorResponse",
    "ImageBlock",
    "ImageSource",
    "InputJsonDelta",
    "ListParams",
    "Message",
    "MessageDelta",
    "MessageDeltaEvent",
    "MessageStart",
    "MessageStartEvent",
    "MessageStopEvent",
    "MessagesRequest",
    "MessagesResponse",
    "Metadata",
    "ModelInfo",
    "ModelList",
    "Page",
    "PingEvent",
    "RedactedThinkingBlock",
    "SignatureDelta",
    "StreamEvent",
    "TextBlock",
    "TextDelta",
    "Thinking",
    "ThinkingBlock",
    "ThinkingDelta",
    "Tool",
    "ToolChoice",
    "ToolChoiceAny",
    "ToolChoiceAuto",
    "ToolChoiceNone",
    "ToolChoiceTool",
    "ToolResultBlock",
    "ToolUseBlock",
    "Usage",
]
