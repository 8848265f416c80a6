"""
Tool use: Claude calls a calculator tool and we send the result back.

Run with ANTHROPIC_API_KEY set:
    python examples/tool_use.py
"""

import asyncio
import json

from anthropic_api import AnthropicClient, Credentials, Message, MessagesRequest, Tool

MODEL = "claude-3-7-sonnet-20250219"

CALCULATOR = Tool(
    name="calculator",
    description="A calculator that can perform basic arithmetic operations",
    input_schema={
        "type": "object",
        "properties": {
            "operation": {"type": "string", "enum": ["add", "subtract", "multiply", "divide"]},
            "operands": {"type": "array", "items": {"type": "number"}, "minItems": 2, "maxItems": 2},
        },
        "required": ["operation", "operands"],
    },
)


def calculate(operation: str, operands) -> str:
    a, b = operands
    if operation == "add":
        return str(a + b)
    if operation == "subtract":
        return str(a - b)
    if operation == "multiply":
        return str(a * b)
    if b == 0:
        return "Error: division by zero"
    return str(a / b)


async def main():
    messages = [Message.user("Please calculate 15 + 27 using the calculator tool.")]

    async with AnthropicClient(Credentials.from_env()) as client:
        while True:
            request = MessagesRequest(
                model=MODEL,
                messages=messages,
                max_tokens=1024,
                tools=[CALCULATOR],
                tool_choice="auto",
            )
            response = await client.messages.create(request)
            messages.append(Message.assistant([block.model_dump() for block in response.content]))

            if not response.tool_uses:
                print(f"Claude: {response.text}")
                break

            results = []
            for call in response.tool_uses:
                print(f"Tool call: {call.name}({json.dumps(call.input)})")
                results.append(
                    {
                        "type": "tool_result",
                        "tool_use_id": call.id,
                        "content": calculate(**call.input),
                    }
                )
            messages.append(Message.user(results))


if __name__ == "__main__":
    asyncio.run(main())
