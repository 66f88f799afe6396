from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from app.core.llm.openai_client import (
    OpenAIClient,
    OpenAIConfig,
    OpenAIUnavailableError,
    OpenAIUpstreamError,
    UnconfiguredOpenAIClient,
)

MESSAGES = [
    {"role": "system", "content": "sys"},
    {"role": "user", "content": [{"type": "text", "text": "hello"}]},
    {"role": "assistant", "content": "format"},
]


def _config() -> OpenAIConfig:
    return OpenAIConfig(
        api_key="sk-test",
        base_url="https://llm.test/v1/",
        model="gpt-4-1106-preview",
        timeout_seconds=5.0,
    )


def _completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _run(handler) -> dict:
    client = OpenAIClient(config=_config(), transport=httpx.MockTransport(handler))
    return asyncio.run(client.generate_json(messages=MESSAGES))


def test_generate_json_posts_completion_request_and_parses_content() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_completion('{"dimensions": []}'))

    assert _run(handler) == {"dimensions": []}

    request = seen[0]
    assert str(request.url) == "https://llm.test/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert json.loads(request.content) == {
        "model": "gpt-4-1106-preview",
        "response_format": {"type": "json_object"},
        "max_tokens": 4096,
        "temperature": 0.0,
        "messages": MESSAGES,
    }


def test_upstream_error_message_is_carried() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})

    with pytest.raises(OpenAIUpstreamError, match="Incorrect API key provided"):
        _run(handler)


def test_error_object_in_ok_response_is_raised() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": {"message": "model overloaded"}})

    with pytest.raises(OpenAIUpstreamError, match="model overloaded"):
        _run(handler)


def test_non_json_error_body_gets_generic_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="Service Unavailable")

    with pytest.raises(OpenAIUpstreamError, match="LLM service returned an error"):
        _run(handler)


@pytest.mark.parametrize(
    "body",
    [
        _completion("not json"),
        _completion('["a", "list"]'),
        {"choices": []},
        {"unexpected": True},
    ],
)
def test_unusable_content_raises(body: dict) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    with pytest.raises(OpenAIUpstreamError):
        _run(handler)


def test_transport_failures_are_wrapped() -> None:
    def timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    def refused(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(OpenAIUpstreamError, match="timed out"):
        _run(timeout)
    with pytest.raises(OpenAIUpstreamError, match="request failed"):
        _run(refused)


def test_unconfigured_client_fails_on_completion() -> None:
    with pytest.raises(OpenAIUnavailableError):
        asyncio.run(UnconfiguredOpenAIClient().generate_json(messages=[]))
