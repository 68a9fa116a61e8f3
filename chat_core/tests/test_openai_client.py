import json

import httpx
import pytest

from chat_core.domain.exceptions import (
    MalformedResponseError,
    MissingCredentialError,
    NetworkError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from chat_core.providers.openai_client import OpenAIClient


class SettingsStub:
    http_timeout = 1.0
    openai_base_url = "https://api.openai.com/v1"


class Resp:
    def __init__(self, status_code, body):
        self.status_code = status_code
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        self.content = body.encode("utf-8")

    @property
    def text(self):
        return self.content.decode("utf-8")


def install_client(monkeypatch, resp=None, exc=None):
    captured = {}

    class Client:
        def __init__(self, *a, **kw):
            captured["client_kwargs"] = kw

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def post(self, url, json=None, headers=None, **_):
            captured["url"] = url
            captured["payload"] = json
            captured["headers"] = headers
            if exc is not None:
                raise exc
            return resp

    monkeypatch.setattr("httpx.AsyncClient", Client)
    return captured


@pytest.mark.asyncio
async def test_complete_returns_trimmed_content(monkeypatch):
    install_client(monkeypatch, Resp(200, {"choices": [{"message": {"content": " Hi there! "}}]}))
    client = OpenAIClient(SettingsStub())
    assert await client.complete("Hello", "sk-test") == "Hi there!"


@pytest.mark.asyncio
async def test_request_shape(monkeypatch):
    captured = install_client(
        monkeypatch, Resp(200, {"choices": [{"message": {"role": "assistant", "content": "ok"}}]})
    )
    client = OpenAIClient(SettingsStub())
    await client.complete("Hello", "sk-test")

    assert captured["url"] == "https://api.openai.com/v1/chat/completions"
    assert captured["payload"] == {
        "model": "gpt-3.5-turbo",
        "messages": [{"role": "user", "content": "Hello"}],
        "max_tokens": 150,
    }
    assert captured["headers"]["Authorization"] == "Bearer sk-test"
    assert captured["headers"]["Content-Type"] == "application/json"
    assert captured["client_kwargs"]["timeout"] == 1.0


@pytest.mark.asyncio
async def test_connection_failure_is_network_error(monkeypatch):
    install_client(monkeypatch, exc=httpx.ConnectError("connection refused"))
    client = OpenAIClient(SettingsStub())
    with pytest.raises(NetworkError) as ei:
        await client.complete("Hello", "sk-test")
    assert ei.value.kind == "NETWORK"


@pytest.mark.asyncio
async def test_timeout_is_network_error(monkeypatch):
    install_client(monkeypatch, exc=httpx.ReadTimeout("timed out"))
    client = OpenAIClient(SettingsStub())
    with pytest.raises(NetworkError):
        await client.complete("Hello", "sk-test")


@pytest.mark.asyncio
async def test_429_is_rate_limited(monkeypatch):
    install_client(monkeypatch, Resp(429, {"error": {"message": "slow down"}}))
    client = OpenAIClient(SettingsStub())
    with pytest.raises(RateLimitError) as ei:
        await client.complete("Hello", "sk-test")
    assert ei.value.kind == "RATE_LIMITED"
    assert ei.value.http_status == 429


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [201, 400, 401, 500, 503])
async def test_other_status_is_server_error(monkeypatch, status):
    install_client(monkeypatch, Resp(status, "upstream failure"))
    client = OpenAIClient(SettingsStub())
    with pytest.raises(ServerError) as ei:
        await client.complete("Hello", "sk-test")
    assert ei.value.status == status
    assert ei.value.kind == "SERVER_ERROR"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        "not json at all",
        "",
        {},
        {"choices": []},
        {"choices": [{}]},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": None}}]},
        {"choices": [{"message": {"content": 42}}]},
        ["choices"],
    ],
)
async def test_malformed_200_body(monkeypatch, body):
    install_client(monkeypatch, Resp(200, body))
    client = OpenAIClient(SettingsStub())
    with pytest.raises(MalformedResponseError) as ei:
        await client.complete("Hello", "sk-test")
    assert ei.value.kind == "MALFORMED_RESPONSE"


@pytest.mark.asyncio
async def test_missing_credential_skips_network(monkeypatch):
    captured = install_client(monkeypatch, exc=AssertionError("post should not be called"))
    client = OpenAIClient(SettingsStub())
    with pytest.raises(MissingCredentialError):
        await client.complete("Hello", "")
    assert "url" not in captured


@pytest.mark.asyncio
async def test_base_url_override(monkeypatch):
    class Custom(SettingsStub):
        openai_base_url = "http://localhost:8080/v1/"

    captured = install_client(monkeypatch, Resp(200, {"choices": [{"message": {"content": "ok"}}]}))
    await OpenAIClient(Custom()).complete("Hello", "sk-test")
    assert captured["url"] == "http://localhost:8080/v1/chat/completions"


@pytest.mark.asyncio
async def test_only_first_choice_is_checked(monkeypatch):
    install_client(
        monkeypatch,
        Resp(200, {"choices": [{"message": {"content": " ok "}}, {"message": {"content": None}}]}),
    )
    client = OpenAIClient(SettingsStub())
    assert await client.complete("Hello", "sk-test") == "ok"


def test_unknown_model_rejected():
    with pytest.raises(ValidationError) as ei:
        OpenAIClient(SettingsStub(), model="does-not-exist")
    assert ei.value.code == "UNKNOWN_MODEL"
