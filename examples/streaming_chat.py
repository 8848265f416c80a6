"""
Interactive chat that prints Claude's reply as it streams in.

Run with ANTHROPIC_API_KEY set:
    python examples/streaming_chat.py
"""

import asyncio

from anthropic_api import AnthropicClient, Credentials, Message, MessagesRequest, setup_logging
from anthropic_api.models import ContentBlockDeltaEvent, TextDelta
from anthropic_api.streaming import MessageAccumulator

MODEL = "claude-3-7-sonnet-20250219"


async def main():
    setup_logging("warning")
    history = []

    async with AnthropicClient(Credentials.from_env()) as client:
        while True:
            prompt = input("\nYou: ").strip()
            if prompt.lower() in ("exit", "quit", ""):
                break
            history.append(Message.user(prompt))

            request = MessagesRequest(model=MODEL, messages=history, max_tokens=1024)
            accumulator = MessageAccumulator()
            print("Claude: ", end="", flush=True)

            async with await client.messages.create_stream(request) as stream:
                async for event in stream:
                    accumulator.feed(event)
                    if isinstance(event, ContentBlockDeltaEvent) and isinstance(event.delta, TextDelta):
                        print(event.delta.text, end="", flush=True)
            print()

            history.append(Message.assistant(accumulator.text))


if __name__ == "__main__":
    asyncio.run(main())
