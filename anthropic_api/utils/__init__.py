from anthropic_api.utils.sse import SSEFrame, format_sse, iter_sse_frames

__all__ = ["SSEFrame", "format_sse", "iter_sse_frames"]
