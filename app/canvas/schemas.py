from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Shapes whose `props.text` is collected as a note.
TEXT_SHAPE_TYPES = frozenset({"text", "geo", "arrow", "note", "node"})
FRAME_SHAPE_TYPE = "new_frame"
NODE_SHAPE_TYPE = "node"


class CanvasShape(BaseModel):
    """A single whiteboard shape as exported by the editor (read-only)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1, description="Shape id.", examples=["shape:note-1"])
    type: str = Field(min_length=1, description="Shape type.", examples=["node", "new_frame"])
    parent_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("parentId", "parent_id"),
        description="Id of the parent shape or page.",
        examples=["shape:frame-1"],
    )
    index: str = Field(
        default="a1",
        description="Fractional index used to order siblings.",
        examples=["a1", "a2V"],
    )
    props: dict[str, Any] = Field(
        default_factory=dict,
        description="Shape properties; notes carry `text`, frames carry `name`.",
    )

    @property
    def text(self) -> Any:
        return self.props.get("text")

    @property
    def name(self) -> Any:
        return self.props.get("name")


class CanvasDocument(BaseModel):
    """Snapshot of the whiteboard page sent along with a brainstorming request."""

    model_config = ConfigDict(populate_by_name=True)

    shapes: list[CanvasShape] = Field(default_factory=list)
    selected_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("selectedIds", "selected_ids"),
        description="Ids of the shapes currently selected in the editor.",
    )
