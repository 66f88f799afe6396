from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import httpx


class OpenAIError(Exception):
    """Base error for OpenAI client failures (safe to map to 502)."""


class OpenAIUnavailableError(OpenAIError):
    """Raised when OpenAI is not configured (e.g., missing API key)."""


class OpenAIUpstreamError(OpenAIError):
    """Raised when OpenAI API fails or returns an unexpected response."""


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: str
    base_url: str
    model: str
    timeout_seconds: float
    max_tokens: int = 4096
    temperature: float = 0.0


def _upstream_error_message(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return None


class OpenAIClient:
    """
    Minimal chat-completions client that asks for, and parses, a JSON object reply.

    - One request per call; no retries, no streaming, no caching.
    - No logging in this module (messages carry user-written canvas text).
    - The parsed object is returned as-is; callers pick the keys they need.
    """

    def __init__(self, *, config: OpenAIConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    @property
    def config(self) -> OpenAIConfig:
        return self._config

    def build_payload(self, *, messages: list[dict[str, Any]]) -> dict[str, Any]:
        return {
            "model": self._config.model,
            # Ask the API to enforce JSON output.
            "response_format": {"type": "json_object"},
            "max_tokens": self._config.max_tokens,
            "temperature": self._config.temperature,
            "messages": messages,
        }

    async def generate_json(self, *, messages: list[dict[str, Any]]) -> dict[str, Any]:
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(messages=messages)

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise OpenAIUpstreamError("LLM request timed out") from exc
        except httpx.HTTPError as exc:
            raise OpenAIUpstreamError("LLM request failed") from exc

        try:
            data = resp.json()
        except ValueError:
            data = None

        upstream_message = _upstream_error_message(data)
        if resp.status_code != 200 or upstream_message is not None:
            raise OpenAIUpstreamError(upstream_message or "LLM service returned an error")

        try:
            content = data["choices"][0]["message"]["content"]
            parsed = json.loads(content)
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise OpenAIUpstreamError("LLM response was not valid JSON") from exc

        if not isinstance(parsed, dict):
            raise OpenAIUpstreamError("LLM response JSON must be an object")

        return parsed


class UnconfiguredOpenAIClient:
    """Stands in when no API key is available; fails only when a completion is requested."""

    async def generate_json(self, *, messages: list[dict[str, Any]]) -> dict[str, Any]:
        raise OpenAIUnavailableError("LLM service is not configured")
