"""
Streaming relay for the Messages endpoint.

A MessageStream owns one open event-stream connection. A producer task reads
SSE frames, decodes each payload into a StreamEvent, drops keepalive pings,
and puts the rest on a bounded asyncio.Queue. The consumer drains the queue
concurrently:

    async with await client.messages.create_stream(request) as stream:
        async for event in stream:
            ...

When the consumer lags, the producer blocks on the full queue; nothing is
dropped and memory stays bounded. The first decode or connection error ends
the stream: events already queued are still delivered, then the error is
raised to the consumer. A clean end-of-stream simply stops iteration.

MessageAccumulator folds the delivered events back into a MessagesResponse.
"""

import asyncio
import contextlib
import logging
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional

import httpx
import orjson

from anthropic_api.codec import UnknownBlockPolicy, decode_stream_event
from anthropic_api.errors import AnthropicError, APIConnectionError, ResponseDecodeError
from anthropic_api.models.common import Usage
from anthropic_api.models.messages import MessagesResponse
from anthropic_api.models.streaming import (
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    ContentBlockStopEvent,
    InputJsonDelta,
    MessageDeltaEvent,
    MessageStart,
    MessageStartEvent,
    PingEvent,
    SignatureDelta,
    StreamEvent,
    TextDelta,
    ThinkingDelta,
)
from anthropic_api.utils.sse import SSEFrame, iter_sse_frames

logger = logging.getLogger(__name__)

# Maximum decoded events waiting for the consumer before the producer blocks
STREAM_BUFFER_SIZE = 32

_END = object()


def _wrap(error_type, message: str, cause: BaseException) -> AnthropicError:
    error = error_type(message)
    error.__cause__ = cause
    return error


class MessageStream:
    """Ordered, backpressured sequence of StreamEvents from one connection.

    Must be created inside a running event loop; the producer task starts
    immediately. Consumed exactly once. Call aclose() (or use ``async with``)
    to abandon a stream early and release the connection.
    """

    def __init__(
        self,
        frames: AsyncIterator[SSEFrame],
        on_close: Optional[Callable[[], Awaitable[Any]]] = None,
        policy: UnknownBlockPolicy = UnknownBlockPolicy.ERROR,
        max_buffered: int = STREAM_BUFFER_SIZE,
    ):
        if max_buffered < 1:
            raise ValueError("max_buffered must be at least 1")
        self._frames = frames
        self._on_close = on_close
        self._policy = UnknownBlockPolicy(policy)
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=max_buffered)
        self._error: Optional[AnthropicError] = None
        self._finished = False
        self._source_closed = False
        self._task = asyncio.get_running_loop().create_task(self._relay())

    @classmethod
    def from_response(
        cls,
        response: httpx.Response,
        policy: UnknownBlockPolicy = UnknownBlockPolicy.ERROR,
        max_buffered: int = STREAM_BUFFER_SIZE,
    ) -> "MessageStream":
        """Relay an open streaming response; the stream closes it when done."""
        return cls(
            iter_sse_frames(response.aiter_lines()),
            on_close=response.aclose,
            policy=policy,
            max_buffered=max_buffered,
        )

    # ------------------------------------------------------------------
    # Producer
    # ------------------------------------------------------------------

    async def _relay(self) -> None:
        delivered = 0
        try:
            async for frame in self._frames:
                if not frame.is_message:
                    continue
                event = decode_stream_event(frame.data, self._policy)
                if event is None or isinstance(event, PingEvent):
                    continue
                await self._queue.put(event)
                delivered += 1
        except AnthropicError as e:
            logger.error(f"Stream terminated after {delivered} events: {e}")
            self._error = e
        except httpx.HTTPError as e:
            logger.error(f"Stream connection failed after {delivered} events: {e}")
            self._error = _wrap(APIConnectionError, f"Stream connection failed: {e}", e)
        except Exception as e:
            logger.exception(f"Stream relay failed after {delivered} events")
            self._error = _wrap(AnthropicError, f"Stream relay failed: {e}", e)
        finally:
            await self._release_source()

        # Not reached on cancellation: an abandoned stream has no consumer
        await self._queue.put(_END)
        logger.debug(f"Stream finished: {delivered} events delivered")

    async def _release_source(self) -> None:
        # A failed close still ends the stream; the first error wins
        try:
            await self._close_source()
        except Exception as e:
            logger.warning(f"Closing stream source failed: {e}")
            if self._error is None:
                error_type = APIConnectionError if isinstance(e, httpx.HTTPError) else AnthropicError
                self._error = _wrap(error_type, f"Closing stream failed: {e}", e)

    async def _close_source(self) -> None:
        if self._source_closed:
            return
        self._source_closed = True
        aclose = getattr(self._frames, "aclose", None)
        if aclose is not None:
            await aclose()
        if self._on_close is not None:
            await self._on_close()

    # ------------------------------------------------------------------
    # Consumer
    # ------------------------------------------------------------------

    async def recv(self) -> Optional[StreamEvent]:
        """
        Wait for the next event.

        Returns:
            The next event, or None once the stream has ended cleanly

        Raises:
            AnthropicError: the relay stopped on an error (raised once)
        """
        if self._finished:
            return None
        item = await self._queue.get()
        if item is _END:
            self._finished = True
            if self._error is not None:
                raise self._error
            return None
        return item

    def __aiter__(self) -> "MessageStream":
        return self

    async def __anext__(self) -> StreamEvent:
        event = await self.recv()
        if event is None:
            raise StopAsyncIteration
        return event

    async def collect(self) -> MessagesResponse:
        """Drain the stream and return the reassembled message."""
        accumulator = MessageAccumulator()
        async for event in self:
            accumulator.feed(event)
        return accumulator.message()

    @property
    def buffered(self) -> int:
        """Number of decoded events waiting for the consumer."""
        return self._queue.qsize()

    @property
    def error(self) -> Optional[AnthropicError]:
        return self._error

    async def aclose(self) -> None:
        """Stop the producer and release the connection."""
        self._finished = True
        if not self._task.done():
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        await self._close_source()

    async def __aenter__(self) -> "MessageStream":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class MessageAccumulator:
    """Reassembles a complete message from streaming events.

    Text and thinking deltas are appended to their block; input_json
    fragments are joined and parsed when the block stops. Events for blocks
    that never started (dropped by the ignore policy) are skipped.
    """

    def __init__(self) -> None:
        self._start: Optional[MessageStart] = None
        self._blocks: Dict[int, Dict[str, Any]] = {}
        self._json_parts: Dict[int, List[str]] = {}
        self.stop_reason: Optional[str] = None
        self.stop_sequence: Optional[str] = None
        self.usage: Optional[Usage] = None

    def feed(self, event: StreamEvent) -> None:
        if isinstance(event, MessageStartEvent):
            self._start = event.message
            self.usage = event.message.usage
        elif isinstance(event, ContentBlockStartEvent):
            self._blocks[event.index] = event.content_block.model_dump()
        elif isinstance(event, ContentBlockDeltaEvent):
            self._apply_delta(event)
        elif isinstance(event, ContentBlockStopEvent):
            self._finish_block(event.index)
        elif isinstance(event, MessageDeltaEvent):
            self.stop_reason = event.delta.stop_reason
            self.stop_sequence = event.delta.stop_sequence
            self._apply_usage(event)

    def _apply_delta(self, event: ContentBlockDeltaEvent) -> None:
        block = self._blocks.get(event.index)
        if block is None:
            return
        delta = event.delta
        if isinstance(delta, TextDelta):
            block["text"] = block.get("text", "") + delta.text
        elif isinstance(delta, InputJsonDelta):
            self._json_parts.setdefault(event.index, []).append(delta.partial_json)
        elif isinstance(delta, ThinkingDelta):
            block["thinking"] = block.get("thinking", "") + delta.thinking
        elif isinstance(delta, SignatureDelta):
            block["signature"] = block.get("signature", "") + delta.signature

    def _finish_block(self, index: int) -> None:
        raw = "".join(self._json_parts.pop(index, []))
        block = self._blocks.get(index)
        if block is None or not raw:
            return
        try:
            block["input"] = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise ResponseDecodeError(f"Invalid tool input JSON for block {index}", raw) from e

    def _apply_usage(self, event: MessageDeltaEvent) -> None:
        delta = event.usage
        if self.usage is None:
            self.usage = Usage(input_tokens=delta.input_tokens or 0, output_tokens=delta.output_tokens)
            return
        update = {k: v for k, v in delta.model_dump().items() if v is not None}
        self.usage = self.usage.model_copy(update=update)

    @property
    def text(self) -> str:
        """Text accumulated so far across all text blocks, in block order."""
        return "".join(
            self._blocks[i].get("text", "")
            for i in sorted(self._blocks)
            if self._blocks[i].get("type") == "text"
        )

    def message(self) -> MessagesResponse:
        """Build the final message. Requires a message_start event."""
        if self._start is None:
            raise ResponseDecodeError("No message_start event received")
        usage = self.usage or Usage(input_tokens=0, output_tokens=0)
        return MessagesResponse(
            id=self._start.id,
            model=self._start.model,
            content=[self._blocks[i] for i in sorted(self._blocks)],
            stop_reason=self.stop_reason,
            stop_sequence=self.stop_sequence,
            usage=usage,
        )
