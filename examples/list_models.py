"""
Print every available model, following pagination cursors.

Run with ANTHROPIC_API_KEY set:
    python examples/list_models.py
"""

import asyncio

from anthropic_api import AnthropicClient, Credentials


async def main():
    async with AnthropicClient(Credentials.from_env()) as client:
        after_id = None
        while True:
            page = await client.models.list(after_id=after_id, limit=20)
            for model in page.data:
                print(f"{model.id:40} {model.display_name:30} {model.created_at}")
            if not page.has_more:
                break
            after_id = page.last_id


if __name__ == "__main__":
    asyncio.run(main())
