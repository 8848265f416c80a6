"""Tests for the stream relay and message reassembly."""

import asyncio

import httpx
import pytest

from anthropic_api.codec import UnknownBlockPolicy
from anthropic_api.errors import AnthropicError, APIConnectionError, APIError, ResponseDecodeError
from anthropic_api.models import (
    ContentBlockDeltaEvent,
    ContentBlockStartEvent,
    ContentBlockStopEvent,
    MessageDeltaEvent,
    MessageStartEvent,
    MessageStopEvent,
    TextBlock,
    ToolUseBlock,
)
from anthropic_api.streaming import MessageAccumulator, MessageStream
from anthropic_api.utils.sse import SSEFrame

from tests.conftest import frames_from, hi_there_events, tool_use_events


async def _drain(stream: MessageStream):
    return [event async for event in stream]


async def _settle(rounds: int = 20):
    for _ in range(rounds):
        await asyncio.sleep(0)


# ---------------------------------------------------------------------------
# Relay ordering and filtering
# ---------------------------------------------------------------------------

class TestRelay:
    @pytest.mark.asyncio
    async def test_events_delivered_in_order_without_pings(self):
        stream = MessageStream(frames_from(hi_there_events()))
        events = await _drain(stream)

        assert [type(e) for e in events] == [
            MessageStartEvent,
            ContentBlockStartEvent,
            ContentBlockDeltaEvent,
            ContentBlockDeltaEvent,
            ContentBlockStopEvent,
            MessageDeltaEvent,
            MessageStopEvent,
        ]
        assert "".join(e.delta.text for e in events if isinstance(e, ContentBlockDeltaEvent)) == "Hi there"

    @pytest.mark.asyncio
    async def test_ping_only_stream_is_empty(self):
        stream = MessageStream(frames_from([{"type": "ping"}] * 5))
        assert await _drain(stream) == []

    @pytest.mark.asyncio
    async def test_non_message_frames_skipped(self):
        async def frames():
            yield SSEFrame(id="1")
            yield SSEFrame(data='{"type": "message_stop"}')

        events = await _drain(MessageStream(frames()))
        assert [type(e) for e in events] == [MessageStopEvent]

    @pytest.mark.asyncio
    async def test_recv_returns_none_after_clean_end(self):
        stream = MessageStream(frames_from([{"type": "message_stop"}]))
        assert isinstance(await stream.recv(), MessageStopEvent)
        assert await stream.recv() is None
        assert await stream.recv() is None

    @pytest.mark.asyncio
    async def test_unknown_events_skipped_under_ignore_policy(self):
        payloads = [{"type": "citations_event"}, {"type": "message_stop"}]
        stream = MessageStream(frames_from(payloads), policy=UnknownBlockPolicy.IGNORE)
        events = await _drain(stream)
        assert [type(e) for e in events] == [MessageStopEvent]

    def test_max_buffered_must_be_positive(self):
        with pytest.raises(ValueError):
            MessageStream(frames_from([]), max_buffered=0)


# ---------------------------------------------------------------------------
# Fatal errors
# ---------------------------------------------------------------------------

class TestRelayErrors:
    @pytest.mark.asyncio
    async def test_malformed_frame_raised_after_prior_events(self):
        payloads = hi_there_events()[:2] + ['{"type": "content_block_delta", "index": 0, "delta": ']
        stream = MessageStream(frames_from(payloads))

        received = []
        with pytest.raises(ResponseDecodeError) as exc_info:
            async for event in stream:
                received.append(event)

        assert [type(e) for e in received] == [MessageStartEvent, ContentBlockStartEvent]
        assert "content_block_delta" in exc_info.value.raw

    @pytest.mark.asyncio
    async def test_frames_after_error_are_not_delivered(self):
        payloads = [{"index": 0}, {"type": "message_stop"}]
        stream = MessageStream(frames_from(payloads))
        with pytest.raises(ResponseDecodeError):
            await stream.recv()
        assert await stream.recv() is None

    @pytest.mark.asyncio
    async def test_error_event_raises_api_error(self):
        payloads = hi_there_events()[:1] + [
            {"type": "error", "error": {"type": "overloaded_error", "message": "Overloaded"}}
        ]
        stream = MessageStream(frames_from(payloads))
        assert isinstance(await stream.recv(), MessageStartEvent)
        with pytest.raises(APIError) as exc_info:
            await stream.recv()
        assert exc_info.value.error_type == "overloaded_error"
        assert stream.error is exc_info.value

    @pytest.mark.asyncio
    async def test_connection_drop_becomes_api_connection_error(self):
        async def frames():
            yield SSEFrame(data='{"type": "message_stop"}')
            raise httpx.ReadError("connection reset")

        stream = MessageStream(frames())
        assert isinstance(await stream.recv(), MessageStopEvent)
        with pytest.raises(APIConnectionError) as exc_info:
            await stream.recv()
        assert isinstance(exc_info.value.__cause__, httpx.ReadError)

    @pytest.mark.asyncio
    async def test_source_closed_after_error(self):
        closed = []

        async def on_close():
            closed.append(True)

        stream = MessageStream(frames_from(["not json"]), on_close=on_close)
        with pytest.raises(ResponseDecodeError):
            await _drain(stream)
        assert closed == [True]


    @pytest.mark.asyncio
    async def test_failing_close_still_ends_stream(self):
        async def on_close():
            raise httpx.ReadError("close failed")

        stream = MessageStream(frames_from([{"type": "message_stop"}]), on_close=on_close)
        assert isinstance(await stream.recv(), MessageStopEvent)
        with pytest.raises(APIConnectionError) as exc_info:
            await asyncio.wait_for(stream.recv(), 1.0)
        assert isinstance(exc_info.value.__cause__, httpx.ReadError)

    @pytest.mark.asyncio
    async def test_failing_close_keeps_first_error(self):
        async def on_close():
            raise httpx.ReadError("close failed")

        stream = MessageStream(frames_from(["not json"]), on_close=on_close)
        with pytest.raises(ResponseDecodeError):
            await asyncio.wait_for(stream.recv(), 1.0)

    @pytest.mark.asyncio
    async def test_unexpected_source_error_is_wrapped(self):
        async def frames():
            yield SSEFrame(data='{"type": "message_stop"}')
            raise RuntimeError("decoder crashed")

        stream = MessageStream(frames())
        assert isinstance(await stream.recv(), MessageStopEvent)
        with pytest.raises(AnthropicError) as exc_info:
            await stream.recv()
        assert isinstance(exc_info.value.__cause__, RuntimeError)


# ---------------------------------------------------------------------------
# Backpressure and cancellation
# ---------------------------------------------------------------------------

class TestFlowControl:
    @pytest.mark.asyncio
    async def test_producer_blocks_when_buffer_full(self):
        pulled = []

        async def frames():
            for i in range(100):
                pulled.append(i)
                yield SSEFrame(data='{"type": "message_stop"}')

        stream = MessageStream(frames(), max_buffered=2)
        await _settle()

        assert stream.buffered == 2
        # Two queued plus the one waiting on the full queue
        assert len(pulled) == 3

        await stream.recv()
        await _settle()
        assert stream.buffered == 2
        assert len(pulled) == 4

        await stream.aclose()

    @pytest.mark.asyncio
    async def test_slow_consumer_receives_everything_in_order(self):
        payloads = [
            {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": str(i)}}
            for i in range(50)
        ]
        stream = MessageStream(frames_from(payloads), max_buffered=3)

        texts = []
        async for event in stream:
            texts.append(event.delta.text)
            await asyncio.sleep(0)

        assert texts == [str(i) for i in range(50)]

    @pytest.mark.asyncio
    async def test_aclose_stops_producer_and_releases_source(self):
        closed = []
        finalized = []

        async def endless():
            try:
                while True:
                    yield SSEFrame(data='{"type": "ping"}')
                    await asyncio.sleep(0)
            finally:
                finalized.append(True)

        async def on_close():
            closed.append(True)

        stream = MessageStream(endless(), on_close=on_close)
        await _settle()
        await stream.aclose()

        assert closed == [True]
        assert finalized == [True]
        assert await stream.recv() is None

    @pytest.mark.asyncio
    async def test_context_manager_closes(self):
        closed = []

        async def on_close():
            closed.append(True)

        async with MessageStream(frames_from(hi_there_events()), on_close=on_close) as stream:
            await stream.recv()
        assert closed == [True]

    @pytest.mark.asyncio
    async def test_aclose_after_completion_is_safe(self):
        stream = MessageStream(frames_from(hi_there_events()))
        await _drain(stream)
        await stream.aclose()
        await stream.aclose()


# ---------------------------------------------------------------------------
# Reassembly
# ---------------------------------------------------------------------------

class TestAccumulator:
    @pytest.mark.asyncio
    async def test_collect_text_message(self):
        message = await MessageStream(frames_from(hi_there_events())).collect()

        assert message.id == "msg_01"
        assert message.content == [TextBlock(text="Hi there")]
        assert message.stop_reason == "end_turn"
        assert message.usage.input_tokens == 12
        assert message.usage.output_tokens == 3

    @pytest.mark.asyncio
    async def test_collect_tool_use_parses_input(self):
        message = await MessageStream(frames_from(tool_use_events())).collect()

        assert message.stop_reason == "tool_use"
        assert message.tool_uses == [ToolUseBlock(id="toolu_01", name="get_weather", input={"city": "Paris"})]

    @pytest.mark.asyncio
    async def test_text_available_mid_stream(self):
        accumulator = MessageAccumulator()
        stream = MessageStream(frames_from(hi_there_events()[:5]))
        async for event in stream:
            accumulator.feed(event)
        assert accumulator.text == "Hi there"

    def test_message_requires_start(self):
        with pytest.raises(ResponseDecodeError):
            MessageAccumulator().message()

    def test_invalid_tool_json_raises(self):
        accumulator = MessageAccumulator()
        accumulator.feed(ContentBlockStartEvent(index=0, content_block=ToolUseBlock(id="t", name="f")))
        accumulator.feed(ContentBlockDeltaEvent.model_validate(
            {"index": 0, "delta": {"type": "input_json_delta", "partial_json": '{"broken'}}
        ))
        with pytest.raises(ResponseDecodeError):
            accumulator.feed(ContentBlockStopEvent(index=0))

    def test_thinking_and_signature_deltas(self):
        accumulator = MessageAccumulator()
        accumulator.feed(MessageStartEvent.model_validate({"message": {"id": "m", "model": "x"}}))
        accumulator.feed(ContentBlockStartEvent.model_validate(
            {"index": 0, "content_block": {"type": "thinking", "thinking": ""}}
        ))
        for delta in (
            {"type": "thinking_delta", "thinking": "Let me "},
            {"type": "thinking_delta", "thinking": "think."},
            {"type": "signature_delta", "signature": "EqQB"},
        ):
            accumulator.feed(ContentBlockDeltaEvent.model_validate({"index": 0, "delta": delta}))
        accumulator.feed(ContentBlockStopEvent(index=0))

        block = accumulator.message().content[0]
        assert block.thinking == "Let me think."
        assert block.signature == "EqQB"
