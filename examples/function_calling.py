"""Function calling demo: the model asks for the weather, the SDK runs the callback."""

import random
from datetime import datetime, timezone

from ai_sdk import ApiFunction, ChatOptions, create_provider


def get_weather(args):
    # 模拟的天气数据
    return {
        "temperature": random.randint(10, 40),
        "conditions": random.choice(["sunny", "cloudy", "rainy", "partly cloudy"]),
        "location": args["location"],
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


FUNCTIONS = [
    ApiFunction(
        name="get_weather",
        description="Get the current weather in a location",
        parameters={
            "type": "object",
            "properties": {
                "location": {
                    "type": "string",
                    "description": "The city and state, e.g., San Francisco, CA",
                }
            },
            "required": ["location"],
        },
        callback=get_weather,
    )
]

if __name__ == "__main__":
    client = create_provider()
    options = ChatOptions(functions=FUNCTIONS, function_call="auto", max_function_rounds=5)

    for question in (
        "What's the weather like in Tokyo right now?",
        "Compare the weather in New York and London.",
    ):
        print("\nUser:", question)
        result = client.generate_text(question, options)
        print("Assistant:" if result.ok else "Error:", result.value if result.ok else result.error)
