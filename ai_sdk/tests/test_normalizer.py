import json

from ai_sdk.streaming.normalizer import normalize_chunk


def test_missing_content_defaults_to_empty_string():
    chunk = normalize_chunk(json.dumps({
        "id": "c1",
        "model": "gpt-3.5-turbo",
        "choices": [{"index": 0, "delta": {"role": "assistant"}, "finish_reason": None}],
    }))
    delta = chunk.choices[0].delta
    assert delta.content == ""
    assert delta.role == "assistant"
    assert delta.function_call is None
    assert chunk.choices[0].finish_reason is None


def test_null_content_defaults_to_empty_string():
    chunk = normalize_chunk('{"id": "c", "model": "m", "choices": [{"index": 0, "delta": {"content": null}}]}')
    assert chunk.choices[0].delta.content == ""


def test_function_call_and_finish_reason_pass_through():
    chunk = normalize_chunk(json.dumps({
        "id": "c2",
        "model": "m",
        "choices": [
            {
                "index": 0,
                "delta": {"function_call": {"name": "get_weather", "arguments": "{\"loc"}},
                "finish_reason": "function_call",
            }
        ],
    }))
    choice = chunk.choices[0]
    assert choice.delta.function_call == {"name": "get_weather", "arguments": "{\"loc"}
    assert choice.finish_reason == "function_call"


def test_done_sentinel_returns_none():
    assert normalize_chunk("[DONE]") is None
    assert normalize_chunk(" [DONE] ") is None


def test_malformed_payloads_return_none():
    assert normalize_chunk("{not json") is None
    assert normalize_chunk("[1, 2]") is None
    assert normalize_chunk('{"choices": "oops"}') is None
    assert normalize_chunk('{"choices": [1]}') is None


def test_unknown_fields_are_ignored():
    chunk = normalize_chunk(json.dumps({
        "id": "c3",
        "model": "m",
        "object": "chat.completion.chunk",
        "system_fingerprint": "fp",
        "choices": [{"index": 0, "delta": {"content": "hi", "refusal": None}, "logprobs": None}],
    }))
    assert chunk.id == "c3"
    assert chunk.text == "hi"


def test_missing_ids_and_index_get_defaults():
    chunk = normalize_chunk('{"choices": [{"delta": {"content": "a"}}, {"delta": {"content": "b"}}]}')
    assert chunk.id == ""
    assert chunk.model == ""
    assert [c.index for c in chunk.choices] == [0, 1]


def test_usage_block_is_carried():
    chunk = normalize_chunk(json.dumps({
        "id": "c4",
        "model": "m",
        "choices": [],
        "usage": {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3},
    }))
    assert chunk.choices == []
    assert chunk.usage.total_tokens == 3


def test_completion_text_becomes_content():
    chunk = normalize_chunk('{"id": "cmpl", "model": "m", "choices": [{"index": 0, "text": "Hello", "finish_reason": null}]}')
    assert chunk.choices[0].delta.content == "Hello"
    assert chunk.text == "Hello"


def test_delta_takes_precedence_over_text():
    chunk = normalize_chunk('{"choices": [{"delta": {"content": "a"}, "text": "b"}]}')
    assert chunk.text == "a"


def test_non_string_content_becomes_empty_string():
    chunk = normalize_chunk('{"choices": [{"delta": {"content": [{"type": "text", "text": "x"}]}}]}')
    assert chunk.choices[0].delta.content == ""
    assert chunk.text == ""
    chunk = normalize_chunk('{"choices": [{"text": 42}]}')
    assert chunk.text == ""
