"""Chat completion demo: simple chat, chat with history and streaming."""

from ai_sdk import ChatOptions, Message, create_provider

if __name__ == "__main__":
    client = create_provider()

    print("\n--- Example 1: Simple Chat ---")
    result = client.chat("What is the capital of France?")
    print("Response:" if result.ok else "Error:", result.value if result.ok else result.error)

    print("\n--- Example 2: Chat with History ---")
    messages = [
        Message(role="system", content="You are a helpful assistant specializing in geography."),
        Message(role="user", content="What's the largest country by area?"),
        Message(role="assistant", content="Russia is the largest country by total area."),
        Message(role="user", content="What about by population?"),
    ]
    result = client.generate_text(messages, ChatOptions(model="gpt-3.5-turbo", temperature=0.7))
    print("Response:" if result.ok else "Error:", result.value if result.ok else result.error)

    print("\n--- Example 3: Streaming Chat ---")
    with client.chat("Tell me a short story about a programmer.", ChatOptions(stream=True)) as stream:
        for chunk in stream:
            print(chunk.text, end="", flush=True)
    print()
    if not stream.ok:
        print("Error:", stream.error)
