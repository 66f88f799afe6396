from __future__ import annotations

import json
import logging
import sys

from app.core.logging import JsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.brainstorm",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Brainstorm completion generated",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_optional_fields() -> None:
    line = JsonFormatter().format(_record(request_id="req-1", operation="groups"))
    payload = json.loads(line)

    assert payload["logger"] == "app.brainstorm"
    assert payload["level"] == "INFO"
    assert payload["message"] == "Brainstorm completion generated"
    assert payload["request_id"] == "req-1"
    assert payload["operation"] == "groups"
    assert payload["status_code"] is None
    assert "exception" not in payload


def test_formatter_maps_http_aliases_and_exceptions() -> None:
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record(http_method="POST", request_path="/brainstorm/summary")
        record.exc_info = sys.exc_info()

    payload = json.loads(JsonFormatter().format(record))
    assert payload["method"] == "POST"
    assert payload["path"] == "/brainstorm/summary"
    assert "RuntimeError: boom" in payload["exception"]
