"""Typed async client for the Anthropic HTTP API."""

from anthropic_api.client import AnthropicClient
from anthropic_api.codec import UnknownBlockPolicy
from anthropic_api.config import Credentials, Settings, setup_logging
from anthropic_api.errors import (
    AnthropicError,
    APIConnectionError,
    APIError,
    ConfigurationError,
    ResponseDecodeError,
)
from anthropic_api.models import (
    Message,
    MessagesRequest,
    MessagesResponse,
    ModelInfo,
    StreamEvent,
    Tool,
)
from anthropic_api.streaming import MessageAccumulator, MessageStream

__version__ = "0.1.0"

__all__ = [
    "AnthropicClient",
    "AnthropicError",
    "APIConnectionError",
    "APIError",
    "ConfigurationError",
    "Credentials",
    "Message",
    "MessageAccumulator",
    "MessageStream",
    "MessagesRequest",
    "MessagesResponse",
    "ModelInfo",
    "ResponseDecodeError",
    "Settings",
    "StreamEvent",
    "Tool",
    "UnknownBlockPolicy",
    "setup_logging",
]
