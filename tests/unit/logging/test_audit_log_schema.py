from __future__ import annotations

import json
from pathlib import Path

from dgl_analyzer.logging import sanitize_arguments
from dgl_analyzer.server import create_server


def test_audit_log_writes_jsonl_schema(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))
    server.handle_payload({"id": "req-100", "method": "server.status", "params": {}})

    audit_path = tmp_path / ".dgl_analyzer" / "audit.jsonl"
    assert audit_path.exists()

    lines = audit_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    event = json.loads(lines[-1])

    assert set(event.keys()) == {
        "blocked",
        "error_code",
        "metadata",
        "ok",
        "request_id",
        "timestamp",
        "tool",
    }
    assert event["request_id"] == "req-100"
    assert event["tool"] == "server.status"
    assert event["ok"] is True
    assert event["blocked"] is False
    assert event["error_code"] is None
    assert event["timestamp"].endswith("Z")


def test_document_text_is_never_written_to_audit_log(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))
    secret_text = "func hidden_name(\nendfunc\n"
    server.handle_payload(
        {
            "id": "req-open",
            "method": "document.did_open",
            "params": {"doc_id": "main.4dg", "text": secret_text},
        }
    )

    raw = (tmp_path / ".dgl_analyzer" / "audit.jsonl").read_text(encoding="utf-8")
    event = json.loads(raw.splitlines()[-1])

    assert "hidden_name" not in raw
    assert event["metadata"] == {
        "doc_id": "main.4dg",
        "text_length": len(secret_text),
        "text_line_count": 3,
        "text_present": True,
    }


def test_sanitize_arguments_summarizes_containers() -> None:
    sanitized = sanitize_arguments(
        {"encoded": True, "limit": 5, "extra": [1, 2], "options": {"b": 1, "a": 2}, "note": "x"}
    )

    assert sanitized == {
        "encoded": True,
        "extra_length": 2,
        "extra_type": "list",
        "limit": 5,
        "note_length": 1,
        "note_present": True,
        "options_keys": ["a", "b"],
        "options_type": "dict",
    }
