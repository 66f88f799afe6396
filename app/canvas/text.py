from __future__ import annotations

import json
import logging
from typing import Any

from app.canvas.schemas import FRAME_SHAPE_TYPE, NODE_SHAPE_TYPE, TEXT_SHAPE_TYPES
from app.canvas.tree import CanvasReader
from app.domain.exceptions import ShapeNotFoundError

logger = logging.getLogger("app.canvas")


def to_compact_json(value: Any) -> str:
    """Serialize like the browser's JSON.stringify (no whitespace, unicode kept)."""

    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _require_shape(tree: CanvasReader, shape_id: str) -> None:
    if tree.get_shape(shape_id) is None:
        raise ShapeNotFoundError(shape_id)


def collect_frame_notes(tree: CanvasReader, frame_id: str) -> list[dict[str, Any]]:
    """
    Collect `{"text", "id"}` for every text-bearing shape inside a frame.

    Nested frames are walked in place so their notes keep canvas order.
    Shapes without text (null, missing or empty) are dropped.
    """

    _require_shape(tree, frame_id)

    def walk(parent_id: str) -> list[dict[str, Any]]:
        out: list[dict[str, Any]] = []
        for child_id in tree.get_sorted_child_ids(parent_id):
            shape = tree.get_shape(child_id)
            if shape is None:
                continue
            if shape.type in TEXT_SHAPE_TYPES:
                out.append({"text": shape.text, "id": shape.id})
            elif shape.type == FRAME_SHAPE_TYPE:
                out.extend(walk(shape.id))
        return out

    return [n for n in walk(frame_id) if n["text"] is not None and n["text"] != ""]


def collect_frame_ideas(tree: CanvasReader, frame_id: str) -> list[dict[str, Any]]:
    """
    Describe the direct children of a frame as ideas for summarization.

    - `node` children become `{"id", "type", "text"}`.
    - `new_frame` children become groups whose `text` is the frame name and whose
      `children` list every direct child's `{"id", "text"}`.
    - Anything else is skipped.
    """

    _require_shape(tree, frame_id)

    ideas: list[dict[str, Any]] = []
    for child_id in tree.get_sorted_child_ids(frame_id):
        shape = tree.get_shape(child_id)
        if shape is None:
            continue
        if shape.type == FRAME_SHAPE_TYPE:
            children = []
            for sub_id in tree.get_sorted_child_ids(shape.id):
                sub = tree.get_shape(sub_id)
                if sub is not None:
                    children.append({"id": sub.id, "text": sub.text})
            ideas.append(
                {
                    "id": shape.id,
                    "type": FRAME_SHAPE_TYPE,
                    "text": shape.name,
                    "children": children,
                }
            )
        elif shape.type == NODE_SHAPE_TYPE:
            ideas.append({"id": shape.id, "type": NODE_SHAPE_TYPE, "text": shape.text})
        else:
            logger.debug("Skipping unsupported shape type", extra={"shape_type": shape.type})

    return ideas
