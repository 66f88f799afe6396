from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from app.canvas.schemas import CanvasDocument


class DimensionsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str | None = Field(
        default=None,
        description="Plan text to split into dimensions. Takes precedence over `source_id`.",
        examples=["Plan a team trip to California"],
    )
    source_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("sourceId", "source_id"),
        description="Shape whose text is used as the plan when `text` is omitted.",
        examples=["shape:plan"],
    )
    document: CanvasDocument | None = Field(
        default=None,
        description="Canvas snapshot used to resolve `source_id`.",
    )


class GroupingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    document: CanvasDocument
    frame_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("frameId", "frame_id"),
        description="Frame whose notes (including nested frames) are grouped.",
        examples=["shape:frame-1"],
    )
    dimensions: list[str] = Field(
        default_factory=list,
        description="Dimensions to group the notes by.",
        examples=[["cost", "effort"]],
    )


class FrameSummaryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    document: CanvasDocument
    frame_id: str = Field(
        min_length=1,
        validation_alias=AliasChoices("frameId", "frame_id"),
        description="Frame whose groups and ideas are summarized.",
        examples=["shape:frame-1"],
    )
    title: str = Field(default="", description="Title the ideas are related to.")


# Outputs are passed through from the LLM reply without schema validation.


class DimensionsOut(BaseModel):
    dimensions: Any = Field(
        default=None,
        description="List of `{topic, subtopics: [{heading, description}]}`; subtopics ranked.",
    )


class GroupingOut(BaseModel):
    classes: Any = Field(default=None, description="Class names (shared properties).")
    classification: Any = Field(
        default=None,
        description="List of `{class, notes: [{id, confidence}]}`.",
    )


class FrameSummaryOut(BaseModel):
    """Whole LLM reply; unknown keys are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    summary: Any = Field(default=None, description="Paragraph-based summary text.")
    reference_matching: Any = Field(
        default=None,
        alias="referenceMatching",
        description="List of `{reference, node id}` linking summary phrases to shape ids.",
    )
