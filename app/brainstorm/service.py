from __future__ import annotations

from typing import Any, Protocol

from app.brainstorm.prompt import (
    build_dimensions_messages,
    build_grouping_messages,
    build_summary_messages,
    require_dimensions,
)
from app.brainstorm.schemas import DimensionsOut, GroupingOut
from app.canvas.text import collect_frame_ideas, collect_frame_notes
from app.canvas.tree import CanvasReader
from app.domain.exceptions import BusinessValidationError, ShapeNotFoundError

NOTHING_SELECTED_MESSAGE = "First select something to make real."


class LLMClient(Protocol):
    async def generate_json(self, *, messages: list[dict[str, Any]]) -> dict[str, Any]: ...


def resolve_plan_text(
    *, text: str | None, tree: CanvasReader | None, source_id: str | None
) -> str:
    """Explicit text wins; otherwise the source shape's text; otherwise empty."""

    if text is not None:
        return text
    if tree is None or source_id is None:
        return ""
    shape = tree.get_shape(source_id)
    if shape is None:
        raise ShapeNotFoundError(source_id)
    return shape.text if isinstance(shape.text, str) else ""


class BrainstormService:
    """
    Runs the three brainstorming completions.

    Each call is linear: extract canvas text, build messages, await one completion,
    pick keys from the parsed reply. Client errors propagate unchanged.
    """

    def __init__(self, *, llm_client: LLMClient):
        self._llm = llm_client

    async def generate_dimensions(self, *, text: str) -> DimensionsOut:
        messages = build_dimensions_messages(text=text)
        parsed = await self._llm.generate_json(messages=messages)
        return DimensionsOut(dimensions=parsed.get("dimensions"))

    async def generate_groups(
        self, *, tree: CanvasReader, frame_id: str, dimensions: list[str]
    ) -> GroupingOut:
        if len(tree.get_selected_shapes()) == 0:
            raise BusinessValidationError(NOTHING_SELECTED_MESSAGE)

        require_dimensions(dimensions)
        notes = collect_frame_notes(tree, frame_id)
        messages = build_grouping_messages(dimensions=dimensions, notes=notes)
        parsed = await self._llm.generate_json(messages=messages)
        return GroupingOut(
            classes=parsed.get("classes"),
            classification=parsed.get("classification"),
        )

    async def summarize_frame(
        self, *, tree: CanvasReader, frame_id: str, title: str
    ) -> dict[str, Any]:
        """Return the parsed reply untouched; missing keys stay missing."""

        ideas = collect_frame_ideas(tree, frame_id)
        messages = build_summary_messages(title=title, ideas=ideas)
        return await self._llm.generate_json(messages=messages)
