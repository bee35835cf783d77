import json

import httpx

from ai_sdk.domain.exceptions import HttpStatusError, RateLimitError, TransportError
from ai_sdk.transport.http import HttpRequest, execute


REQUEST = HttpRequest(
    method="POST",
    url="https://api.openai.com/v1/chat/completions",
    headers={"Authorization": "Bearer k"},
    body={"model": "gpt-3.5-turbo", "messages": []},
)


class Resp:
    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text

    def json(self):
        return json.loads(self.text)


def _client_returning(resp, captured=None):
    class Client:
        def __init__(self, *a, **kw):
            if captured is not None:
                captured["client_kwargs"] = kw

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def request(self, method, url, json=None, headers=None, **_):
            if captured is not None:
                captured.update(method=method, url=url, json=json, headers=headers)
            if isinstance(resp, Exception):
                raise resp
            return resp

    return Client


def test_execute_success(monkeypatch):
    captured = {}
    body = {"choices": [{"finish_reason": "stop", "message": {"content": "4"}}]}
    monkeypatch.setattr("httpx.Client", _client_returning(Resp(200, json.dumps(body)), captured))
    result = execute(REQUEST, timeout=5.0)
    assert result.ok
    assert result.value == body
    assert captured["method"] == "POST"
    assert captured["json"] == REQUEST.body
    assert captured["headers"]["Authorization"] == "Bearer k"
    assert captured["client_kwargs"]["timeout"] == 5.0


def test_execute_status_error_with_json_body(monkeypatch):
    err_body = {"error": {"message": "bad model"}}
    monkeypatch.setattr("httpx.Client", _client_returning(Resp(400, json.dumps(err_body))))
    result = execute(REQUEST)
    assert not result.ok
    assert isinstance(result.error, HttpStatusError)
    assert result.error.status == 400
    assert result.error.body == err_body


def test_execute_status_error_with_raw_body(monkeypatch):
    monkeypatch.setattr("httpx.Client", _client_returning(Resp(502, "<html>bad gateway</html>")))
    result = execute(REQUEST)
    assert result.error.status == 502
    assert result.error.body == "<html>bad gateway</html>"


def test_execute_rate_limit(monkeypatch):
    monkeypatch.setattr("httpx.Client", _client_returning(Resp(429, '{"error": "slow down"}')))
    result = execute(REQUEST)
    assert isinstance(result.error, RateLimitError)
    assert result.error.status == 429
    assert result.error.code == "RATE_LIMIT"


def test_execute_transport_error(monkeypatch):
    cause = httpx.ConnectError("connection refused")
    monkeypatch.setattr("httpx.Client", _client_returning(cause))
    result = execute(REQUEST)
    assert isinstance(result.error, TransportError)
    assert result.error.cause is cause


def test_execute_invalid_success_body(monkeypatch):
    monkeypatch.setattr("httpx.Client", _client_returning(Resp(200, "not json")))
    result = execute(REQUEST)
    assert result.error.code == "INVALID_RESPONSE_BODY"
    assert result.error.body == "not json"
