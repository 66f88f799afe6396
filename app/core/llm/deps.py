from __future__ import annotations

from fastapi import Header

from app.core.llm.openai_client import OpenAIClient, OpenAIConfig
from app.core.settings import get_settings


def get_openai_client(
    x_openai_key: str | None = Header(default=None, alias="X-OpenAI-Key"),
) -> OpenAIClient | None:
    """
    Dependency provider for OpenAIClient.

    A key typed into the whiteboard (sent as X-OpenAI-Key) takes precedence over the
    configured OPENAI_API_KEY. Returns None when neither is present; routes then run their input checks
    and answer 502 only once a completion is actually needed.
    """

    settings = get_settings()
    api_key = (x_openai_key or "").strip() or settings.openai_api_key
    if not api_key:
        return None

    config = OpenAIConfig(
        api_key=api_key,
        base_url=settings.openai_base_url,
        model=settings.openai_model,
        timeout_seconds=float(settings.openai_timeout_seconds),
        max_tokens=int(settings.openai_max_tokens),
        temperature=float(settings.openai_temperature),
    )
    return OpenAIClient(config=config)
