from __future__ import annotations

import logging

import pytest

from app.canvas.schemas import CanvasDocument
from app.canvas.text import collect_frame_ideas, collect_frame_notes, to_compact_json
from app.canvas.tree import ShapeTree
from app.domain.exceptions import ShapeNotFoundError
from tests.brainstorm._helpers import planning_board, shape


def _tree(document: dict) -> ShapeTree:
    return ShapeTree(CanvasDocument.model_validate(document))


def test_collect_frame_notes_walks_nested_frames_in_order_and_drops_empty_text() -> None:
    notes = collect_frame_notes(_tree(planning_board()), "shape:board")

    assert notes == [
        {"text": "Pick dates", "id": "shape:n0"},
        {"text": "Book flights", "id": "shape:n1"},
        {"text": "Try tacos", "id": "shape:g1"},
    ]


def test_collect_frame_notes_includes_every_text_bearing_type() -> None:
    doc = {
        "shapes": [
            shape("shape:f", "new_frame"),
            shape("shape:1", "text", parent="shape:f", index="a1", text="t"),
            shape("shape:2", "geo", parent="shape:f", index="a2", text="g"),
            shape("shape:3", "arrow", parent="shape:f", index="a3", text="a"),
            shape("shape:4", "note", parent="shape:f", index="a4", text="n"),
            shape("shape:5", "node", parent="shape:f", index="a5", text="d"),
            shape("shape:6", "geo", parent="shape:f", index="a6"),
            shape("shape:7", "draw", parent="shape:f", index="a7", text="ignored"),
        ]
    }
    notes = collect_frame_notes(_tree(doc), "shape:f")
    assert [n["id"] for n in notes] == ["shape:1", "shape:2", "shape:3", "shape:4", "shape:5"]


def test_collect_frame_ideas_describes_direct_children_only() -> None:
    ideas = collect_frame_ideas(_tree(planning_board()), "shape:board")

    assert ideas == [
        {"id": "shape:n0", "type": "node", "text": "Pick dates"},
        {"id": "shape:n1", "type": "node", "text": "Book flights"},
        {
            "id": "shape:grp",
            "type": "new_frame",
            "text": "Food",
            "children": [
                {"id": "shape:g1", "text": "Try tacos"},
                {"id": "shape:g2", "text": ""},
            ],
        },
    ]


def test_collect_frame_ideas_logs_skipped_shape_types(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="app.canvas")

    collect_frame_ideas(_tree(planning_board()), "shape:board")

    skipped = [r for r in caplog.records if r.name == "app.canvas"]
    assert len(skipped) == 1
    assert skipped[0].__dict__["shape_type"] == "image"


@pytest.mark.parametrize("collect", [collect_frame_notes, collect_frame_ideas])
def test_unknown_frame_raises_shape_not_found(collect) -> None:
    with pytest.raises(ShapeNotFoundError) as exc_info:
        collect(_tree(planning_board()), "shape:nope")
    assert exc_info.value.shape_id == "shape:nope"


def test_empty_frame_yields_no_entries() -> None:
    tree = _tree({"shapes": [shape("shape:f", "new_frame")]})
    assert collect_frame_notes(tree, "shape:f") == []
    assert collect_frame_ideas(tree, "shape:f") == []


def test_to_compact_json_matches_browser_stringify() -> None:
    assert to_compact_json([{"text": "café", "id": "shape:1"}]) == '[{"text":"café","id":"shape:1"}]'
    assert to_compact_json(["cost", "time"]) == '["cost","time"]'
