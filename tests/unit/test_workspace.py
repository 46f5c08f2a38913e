from __future__ import annotations

from dgl_analyzer.scanner import CompletionEntry
from dgl_analyzer.workspace import AnalysisWorkspace


def test_open_then_change_replaces_symbols() -> None:
    workspace = AnalysisWorkspace()

    workspace.on_document_opened("main.4dg", "func draw(\nendfunc\n")
    workspace.on_document_changed("main.4dg", "var only\n")

    assert [symbol.name for symbol in workspace.get_symbols("main.4dg")] == ["only"]
    assert workspace.get_completions() == ()


def test_unknown_document_has_no_symbols() -> None:
    assert AnalysisWorkspace().get_symbols("nope.4dg") == ()


def test_global_completions_leak_between_documents() -> None:
    workspace = AnalysisWorkspace()

    workspace.on_document_opened("a.4dg", "func alpha(\nendfunc\n")
    workspace.on_document_opened("b.4dg", "var x\n")

    assert workspace.get_completions("a.4dg") == ()


def test_document_completion_scope_isolates_documents() -> None:
    workspace = AnalysisWorkspace(completion_scope="document")

    workspace.on_document_opened("a.4dg", "func alpha(\nendfunc\n")
    workspace.on_document_opened("b.4dg", "var x\n")

    assert workspace.get_completions("a.4dg") == (CompletionEntry(name="alpha"),)
    assert workspace.get_completions("b.4dg") == ()


def test_token_strategy_is_selected_by_name() -> None:
    text = "var count [keyword]\ncount\n"

    annotation = AnalysisWorkspace(token_strategy="annotation")
    declarations = AnalysisWorkspace(token_strategy="declarations")

    assert annotation.token_strategy == "annotation"
    assert [s.token_type for s in annotation.get_tokens(text)] == ["keyword"]
    assert [s.token_type for s in declarations.get_tokens(text)] == ["variable", "variable"]


def test_tokens_do_not_touch_result_store() -> None:
    workspace = AnalysisWorkspace()

    workspace.get_tokens("func f(\nendfunc\n")

    assert workspace.store.document_ids() == ()
    assert workspace.get_completions() == ()
