"""
JSON codec for request bodies, response envelopes and stream frames.

Every response body is either the success payload or an error envelope
({"type": "error", "error": {"type": ..., "message": ...}}). The envelope is
checked first and always wins, whatever the HTTP status.
"""

import logging
from enum import Enum
from typing import Any, Optional, Type, TypeVar, Union

import orjson
from pydantic import BaseModel, TypeAdapter, ValidationError

from anthropic_api.errors import APIError, ResponseDecodeError
from anthropic_api.models.common import ErrorResponse
from anthropic_api.models.messages import CONTENT_BLOCK_TYPES
from anthropic_api.models.streaming import (
    DELTA_TYPES,
    STREAM_EVENT_TYPES,
    StreamEvent,
    content_block_kind,
    delta_kind,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_stream_event_adapter = TypeAdapter(StreamEvent)


class UnknownBlockPolicy(str, Enum):
    """What to do with content blocks, deltas or stream events of an unknown kind.

    ERROR: fail decoding (default, strict).
    IGNORE: drop the unknown item and keep going.

    A payload with no `type` discriminant at all is always an error.
    """

    ERROR = "error"
    IGNORE = "ignore"


def _as_text(raw: Union[str, bytes]) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def encode_body(model: BaseModel) -> bytes:
    """Serialize a request model, leaving out every unset optional field."""
    return orjson.dumps(model.model_dump(mode="json", exclude_none=True))


def load_json(raw: Union[str, bytes], status_code: Optional[int] = None) -> Any:
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise ResponseDecodeError(f"Invalid JSON: {e}", _as_text(raw), status_code) from e


def is_error_envelope(data: Any) -> bool:
    return (
        isinstance(data, dict)
        and data.get("type") == "error"
        and isinstance(data.get("error"), dict)
    )


def raise_for_error_envelope(
    data: Any, raw: Union[str, bytes], status_code: Optional[int] = None
) -> None:
    """Raise APIError if data is an error envelope, otherwise do nothing."""
    if not is_error_envelope(data):
        return
    try:
        envelope = ErrorResponse.model_validate(data)
    except ValidationError as e:
        raise ResponseDecodeError("Malformed error envelope", _as_text(raw), status_code) from e
    raise APIError(envelope.error.type, envelope.error.message, status_code, envelope)


def _drop_unknown_content(data: Any) -> Any:
    content = data.get("content") if isinstance(data, dict) else None
    if not isinstance(content, list):
        return data
    kept = []
    for block in content:
        kind = block.get("type") if isinstance(block, dict) else None
        # Non-string tags are kept so schema validation rejects them
        if isinstance(kind, str) and kind not in CONTENT_BLOCK_TYPES:
            logger.debug(f"Ignoring unknown content block type '{kind}'")
            continue
        kept.append(block)
    return {**data, "content": kept}


def decode_response(
    raw: Union[str, bytes],
    response_model: Type[M],
    status_code: Optional[int] = None,
    policy: UnknownBlockPolicy = UnknownBlockPolicy.ERROR,
) -> M:
    """
    Decode a response body into response_model.

    Args:
        raw: Response body
        response_model: Pydantic model of the success payload
        status_code: HTTP status, used for error reporting
        policy: Handling of unknown content block types

    Returns:
        The validated success payload

    Raises:
        APIError: body is an error envelope
        ResponseDecodeError: body is not JSON, does not match the schema, or
            is a non-2xx response without an error envelope
    """
    data = load_json(raw, status_code)
    raise_for_error_envelope(data, raw, status_code)

    if status_code is not None and status_code >= 400:
        raise ResponseDecodeError(
            f"HTTP {status_code} response without an error envelope", _as_text(raw), status_code
        )

    if policy is UnknownBlockPolicy.IGNORE:
        data = _drop_unknown_content(data)

    try:
        return response_model.model_validate(data)
    except ValidationError as e:
        raise ResponseDecodeError(
            f"Response does not match {response_model.__name__}: {e.error_count()} error(s)",
            _as_text(raw),
            status_code,
        ) from e


def _unknown_event_kind(payload: dict) -> Optional[str]:
    """Return the unrecognized kind carried by payload, if any."""
    event_type = payload["type"]
    if event_type not in STREAM_EVENT_TYPES:
        return event_type
    if event_type == "content_block_start":
        kind = content_block_kind(payload.get("content_block"))
        if kind is not None and kind not in CONTENT_BLOCK_TYPES:
            return kind
    elif event_type == "content_block_delta":
        kind = delta_kind(payload.get("delta"))
        if kind is not None and kind not in DELTA_TYPES:
            return kind
    return None


def decode_stream_event(
    data: str, policy: UnknownBlockPolicy = UnknownBlockPolicy.ERROR
) -> Optional[StreamEvent]:
    """
    Decode one SSE data payload into a StreamEvent.

    Returns None only when policy is IGNORE and the payload is of an unknown
    kind. An error event sent mid-stream raises APIError.
    """
    payload = load_json(data)
    raise_for_error_envelope(payload, data)

    event_type = payload.get("type") if isinstance(payload, dict) else None
    if not event_type or not isinstance(event_type, str):
        raise ResponseDecodeError("Stream event has no type discriminant", data)

    if policy is UnknownBlockPolicy.IGNORE:
        unknown = _unknown_event_kind(payload)
        if unknown is not None:
            logger.debug(f"Ignoring stream event with unknown kind '{unknown}'")
            return None

    try:
        return _stream_event_adapter.validate_python(payload)
    except ValidationError as e:
        raise ResponseDecodeError(
            f"Invalid '{payload['type']}' stream event: {e.error_count()} error(s)", data
        ) from e
