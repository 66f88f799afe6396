from __future__ import annotations

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Health check response (process liveness only; the LLM provider is not contacted)."""

    status: str = Field(
        description="`ok` means the API process is up and accepting brainstorm requests.",
        examples=["ok"],
    )
