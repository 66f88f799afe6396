from __future__ import annotations

from collections import defaultdict
from typing import Protocol

from app.canvas.schemas import CanvasDocument, CanvasShape


class CanvasReader(Protocol):
    def get_shape(self, shape_id: str) -> CanvasShape | None: ...

    def get_sorted_child_ids(self, parent_id: str) -> list[str]: ...

    def get_selected_shapes(self) -> list[CanvasShape]: ...


class ShapeTree:
    """
    Read-only parent/child index over a canvas snapshot.

    Children are ordered by their fractional `index` string; ties keep snapshot order.
    Duplicate ids resolve to the last shape in the snapshot.
    """

    def __init__(self, document: CanvasDocument):
        self._shapes: dict[str, CanvasShape] = {}
        self._children: dict[str, list[CanvasShape]] = defaultdict(list)
        self._selected_ids = list(document.selected_ids)

        for shape in document.shapes:
            self._shapes[shape.id] = shape
        for shape in self._shapes.values():
            if shape.parent_id is not None:
                self._children[shape.parent_id].append(shape)
        for siblings in self._children.values():
            siblings.sort(key=lambda s: s.index)

    def get_shape(self, shape_id: str) -> CanvasShape | None:
        return self._shapes.get(shape_id)

    def get_sorted_child_ids(self, parent_id: str) -> list[str]:
        return [s.id for s in self._children.get(parent_id, [])]

    def get_selected_shapes(self) -> list[CanvasShape]:
        return [self._shapes[i] for i in self._selected_ids if i in self._shapes]
