from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "brainstorm-canvas"
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )

    # LLM integration (OpenAI-compatible chat completions)
    # The key may also be supplied per request from the whiteboard (X-OpenAI-Key header).
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "openai_api_key"),
        description="Fallback OpenAI API key used when a request does not carry its own.",
    )
    openai_model: str = Field(
        default="gpt-4-1106-preview",
        validation_alias=AliasChoices("OPENAI_MODEL", "openai_model"),
        description="Model identifier used for every brainstorming completion.",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        validation_alias=AliasChoices("OPENAI_BASE_URL", "openai_base_url"),
        description="Base URL for OpenAI API (override for proxies/emulators).",
    )
    openai_timeout_seconds: float = Field(
        default=120.0,
        ge=1.0,
        validation_alias=AliasChoices("OPENAI_TIMEOUT_SECONDS", "openai_timeout_seconds"),
        description="HTTP client timeout for OpenAI API requests (seconds).",
    )
    openai_max_tokens: int = Field(
        default=4096,
        ge=1,
        validation_alias=AliasChoices("OPENAI_MAX_TOKENS", "openai_max_tokens"),
        description="Completion token limit sent with every request.",
    )
    openai_temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("OPENAI_TEMPERATURE", "openai_temperature"),
        description="Sampling temperature sent with every request.",
    )

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
