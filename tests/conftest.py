from typing import Any, Callable, Dict, Iterable, List

import httpx
import orjson
import pytest
import pytest_asyncio

from anthropic_api.client import AnthropicClient
from anthropic_api.config import Credentials
from anthropic_api.utils.sse import SSEFrame, format_sse

API_KEY = "sk-ant-test-key"
BASE_URL = "https://api.example.test/v1/"


# ---------------------------------------------------------------------------
# Canned stream payloads
# ---------------------------------------------------------------------------

def hi_there_events() -> List[Dict[str, Any]]:
    """A complete text reply "Hi there" with a keepalive ping in the middle."""
    return [
        {
            "type": "message_start",
            "message": {
                "id": "msg_01",
                "type": "message",
                "role": "assistant",
                "model": "claude-3-7-sonnet-20250219",
                "content": [],
                "stop_reason": None,
                "stop_sequence": None,
                "usage": {"input_tokens": 12, "output_tokens": 1},
            },
        },
        {"type": "content_block_start", "index": 0, "content_block": {"type": "text", "text": ""}},
        {"type": "ping"},
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": "Hi"}},
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": " there"}},
        {"type": "content_block_stop", "index": 0},
        {
            "type": "message_delta",
            "delta": {"stop_reason": "end_turn", "stop_sequence": None},
            "usage": {"output_tokens": 3},
        },
        {"type": "message_stop"},
    ]


def tool_use_events() -> List[Dict[str, Any]]:
    return [
        {
            "type": "message_start",
            "message": {
                "id": "msg_02",
                "model": "claude-3-7-sonnet-20250219",
                "content": [],
                "usage": {"input_tokens": 40, "output_tokens": 1},
            },
        },
        {
            "type": "content_block_start",
            "index": 0,
            "content_block": {"type": "tool_use", "id": "toolu_01", "name": "get_weather", "input": {}},
        },
        {"type": "content_block_delta", "index": 0, "delta": {"type": "input_json_delta", "partial_json": ""}},
        {"type": "content_block_delta", "index": 0, "delta": {"type": "input_json_delta", "partial_json": '{"city": "Par'}},
        {"type": "content_block_delta", "index": 0, "delta": {"type": "input_json_delta", "partial_json": 'is"}'}},
        {"type": "content_block_stop", "index": 0},
        {"type": "message_delta", "delta": {"stop_reason": "tool_use"}, "usage": {"output_tokens": 18}},
        {"type": "message_stop"},
    ]


def sse_body(events: Iterable[Dict[str, Any]]) -> bytes:
    """Render payloads as an event-stream body, the way the server frames them."""
    return "".join(format_sse(e["type"], orjson.dumps(e).decode()) for e in events).encode()


async def frames_from(payloads: Iterable[Any]):
    """Yield one message frame per payload; strings are sent verbatim."""
    for payload in payloads:
        data = payload if isinstance(payload, str) else orjson.dumps(payload).decode()
        yield SSEFrame(event="message", data=data)


def json_response(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(status_code, content=orjson.dumps(payload), headers={"content-type": "application/json"})


def error_envelope(error_type: str, message: str) -> Dict[str, Any]:
    return {"type": "error", "error": {"type": error_type, "message": message}}


# ---------------------------------------------------------------------------
# Mock server
# ---------------------------------------------------------------------------

class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays queued responses."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.responses: List[Callable[[httpx.Request], httpx.Response]] = []

    def queue(self, response: httpx.Response):
        self.responses.append(lambda request: response)

    def queue_json(self, payload: Any, status_code: int = 200):
        self.queue(json_response(status_code, payload))

    def queue_stream(self, events: Iterable[Dict[str, Any]]):
        self.queue(httpx.Response(200, content=sse_body(events), headers={"content-type": "text/event-stream"}))

    def queue_raise(self, exc: Exception):
        def _raise(request):
            raise exc
        self.responses.append(_raise)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responses.pop(0)(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return orjson.loads(self.last.content)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(api_key=API_KEY, base_url=BASE_URL)


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest_asyncio.fixture
async def client(credentials, handler):
    client = AnthropicClient(credentials, transport=httpx.MockTransport(handler))
    yield client
    await client.cleanup()


class TrackingStream(httpx.AsyncByteStream):
    """Response body that records whether the client closed it."""

    def __init__(self, body: bytes):
        self.body = body
        self.closed = False

    async def __aiter__(self):
        yield self.body

    async def aclose(self):
        self.closed = True
