from __future__ import annotations

from pathlib import Path

from dgl_analyzer.config import CliOverrides
from dgl_analyzer.server import create_server


def _call(server, method: str, **params: object) -> dict[str, object]:
    response = server.handle_payload({"id": f"req-{method}", "method": method, "params": params})
    assert response["ok"] is True, response
    return response["result"]


def _fixture_text(name: str) -> str:
    return (Path("tests/fixtures/dgl") / name).read_text(encoding="utf-8")


def test_open_and_query_symbols_returns_nested_outline(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))
    text = "#constant CFG 1\nfunc add(\nvar x\nendfunc\n"

    opened = _call(server, "document.did_open", doc_id="demo.4dg", text=text)
    symbols = _call(server, "document.symbols", doc_id="demo.4dg")["symbols"]

    assert opened == {"doc_id": "demo.4dg", "symbol_count": 2, "completion_count": 1}
    assert [(s["kind"], s["name"], s["detail"]) for s in symbols] == [
        ("constant", "CFG", "1"),
        ("function", "add", ""),
    ]
    function = symbols[1]
    assert function["kind_code"] == 12
    assert function["range"] == {
        "start": {"line": 1, "character": 0},
        "end": {"line": 3, "character": 7},
    }
    assert function["selection_range"] == {
        "start": {"line": 1, "character": 5},
        "end": {"line": 1, "character": 8},
    }
    assert [(c["kind"], c["name"], c["kind_code"]) for c in function["children"]] == [
        ("variable", "x", 13)
    ]
    assert symbols[0]["kind_code"] == 14


def test_change_triggers_full_rescan(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))
    _call(server, "document.did_open", doc_id="m.4dg", text=_fixture_text("sample.4dg"))

    _call(server, "document.did_change", doc_id="m.4dg", text="func solo(\nendfunc\n")

    symbols = _call(server, "document.symbols", doc_id="m.4dg")["symbols"]
    items = _call(server, "document.completions")["items"]
    assert [s["name"] for s in symbols] == ["solo"]
    assert [item["name"] for item in items] == ["solo"]


def test_unknown_document_returns_empty_symbols(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))

    result = _call(server, "document.symbols", doc_id="never.4dg")

    assert result == {"doc_id": "never.4dg", "symbols": []}


def test_completions_follow_configured_scope(tmp_path: Path) -> None:
    shared = create_server(workspace_root=str(tmp_path))
    isolated = create_server(
        workspace_root=str(tmp_path),
        cli_overrides=CliOverrides(completion_scope="document"),
    )
    for server in (shared, isolated):
        _call(server, "document.did_open", doc_id="a.4dg", text="func fromA(\nendfunc\n")
        _call(server, "document.did_open", doc_id="b.4dg", text="func fromB(\nendfunc\n")

    shared_items = _call(shared, "document.completions", doc_id="a.4dg")["items"]
    isolated_items = _call(isolated, "document.completions", doc_id="a.4dg")["items"]

    assert [item["name"] for item in shared_items] == ["fromB"]
    assert [item["name"] for item in isolated_items] == ["fromA"]


def test_semantic_tokens_with_encoded_stream(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))
    text = "func add(\n  var add\nendfunc\n"

    result = _call(server, "document.semantic_tokens", text=text, encoded=True)

    assert result["strategy"] == "declarations"
    assert [token["token_type"] for token in result["tokens"]] == ["variable", "variable"]
    assert result["data"] == [0, 5, 3, 16, 0, 1, 6, 3, 16, 0]


def test_annotation_strategy_through_server(tmp_path: Path) -> None:
    server = create_server(
        workspace_root=str(tmp_path),
        cli_overrides=CliOverrides(token_strategy="annotation"),
    )

    result = _call(server, "document.semantic_tokens", text="foo [variable.readonly] bar")

    assert result == {
        "strategy": "annotation",
        "tokens": [
            {
                "line": 0,
                "start_character": 5,
                "length": 17,
                "token_type": "variable",
                "token_modifiers": ["readonly"],
            }
        ],
    }


def test_status_lists_scanned_documents_and_audit_log_reads_back(tmp_path: Path) -> None:
    server = create_server(workspace_root=str(tmp_path))
    _call(server, "document.did_open", doc_id="one.4dg", text="var a\n")
    _call(server, "document.did_open", doc_id="two.4dg", text="var b\n")

    status = _call(server, "server.status")
    entries = _call(server, "server.audit_log", limit=2)["entries"]

    assert status["documents"] == ["one.4dg", "two.4dg"]
    assert [entry["tool"] for entry in entries] == ["document.did_open", "server.status"]
