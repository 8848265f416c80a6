"""Server-sent event framing: parse frames from a line stream, and format them."""

from dataclasses import dataclass
from typing import AsyncIterable, AsyncIterator, List, Optional


@dataclass
class SSEFrame:
    """One dispatched event-stream frame"""

    event: str = "message"
    data: Optional[str] = None
    id: Optional[str] = None
    retry: Optional[int] = None

    @property
    def is_message(self) -> bool:
        """Frames without a data field (id/retry-only) carry no payload."""
        return self.data is not None


async def iter_sse_frames(lines: AsyncIterable[str]) -> AsyncIterator[SSEFrame]:
    """
    Group raw lines into SSE frames.

    Follows the event-stream format: a blank line dispatches the pending
    frame, lines starting with ':' are comments, one space after the colon is
    stripped, and repeated data lines are joined with newlines. A trailing
    frame without its terminating blank line is discarded.

    Args:
        lines: Lines without their line terminators (e.g. response.aiter_lines())

    Yields:
        SSEFrame objects in arrival order
    """
    event: Optional[str] = None
    data_lines: List[str] = []
    event_id: Optional[str] = None
    retry: Optional[int] = None
    pending = False

    async for line in lines:
        line = line.rstrip("\r\n")

        if not line:
            if pending:
                yield SSEFrame(
                    event=event or "message",
                    data="\n".join(data_lines) if data_lines else None,
                    id=event_id,
                    retry=retry,
                )
            event, data_lines, event_id, retry, pending = None, [], None, None, False
            continue

        if line.startswith(":"):
            continue

        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]

        if field == "event":
            event = value
        elif field == "data":
            data_lines.append(value)
        elif field == "id":
            event_id = value
        elif field == "retry":
            if not value.isdigit():
                continue
            retry = int(value)
        else:
            continue
        pending = True


def format_sse(event: str, data: str) -> str:
    """Format data as SSE event"""
    lines = "".join(f"data: {part}\n" for part in data.split("\n"))
    return f"event: {event}\n{lines}\n"
