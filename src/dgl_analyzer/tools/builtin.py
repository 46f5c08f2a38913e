"""Built-in document and server tools."""

from __future__ import annotations

from collections.abc import Callable

from dgl_analyzer.config import ServerConfig
from dgl_analyzer.limits import AnalyzerLimits, enforce_document_limits
from dgl_analyzer.tools.registry import ToolDispatchError, ToolHandler, ToolRegistry
from dgl_analyzer.workspace import AnalysisWorkspace

DEFAULT_AUDIT_LIMIT = 50
MAX_AUDIT_LIMIT = 500


def register_builtin_tools(
    registry: ToolRegistry,
    workspace: AnalysisWorkspace,
    limits: AnalyzerLimits,
    read_audit_entries: Callable[[str | None, int], list[dict[str, object]]],
    config: ServerConfig,
) -> None:
    """Register the document lifecycle, query, and server tools."""
    registry.register("server.status", _status_handler(workspace, config))
    registry.register("document.did_open", _document_event_handler("did_open", workspace, limits))
    registry.register(
        "document.did_change", _document_event_handler("did_change", workspace, limits)
    )
    registry.register("document.symbols", _symbols_handler(workspace))
    registry.register("document.completions", _completions_handler(workspace))
    registry.register("document.semantic_tokens", _semantic_tokens_handler(workspace, limits))
    registry.register("server.token_legend", _token_legend_handler(workspace))
    registry.register("server.audit_log", _audit_log_handler(read_audit_entries))


def _status_handler(workspace: AnalysisWorkspace, config: ServerConfig) -> ToolHandler:
    def handler(_: dict[str, object]) -> dict[str, object]:
        return {
            "workspace_root": str(config.workspace_root),
            "documents": list(workspace.store.document_ids()),
            "token_strategy": workspace.token_strategy,
            "completion_scope": workspace.completion_scope,
            "effective_config": config.to_public_dict(),
        }

    return handler


def _document_event_handler(
    event: str,
    workspace: AnalysisWorkspace,
    limits: AnalyzerLimits,
) -> ToolHandler:
    tool_name = f"document.{event}"
    on_event = (
        workspace.on_document_opened if event == "did_open" else workspace.on_document_changed
    )

    def handler(arguments: dict[str, object]) -> dict[str, object]:
        doc_id = _require_doc_id(arguments, tool_name)
        text = _require_text(arguments, tool_name)
        enforce_document_limits(text, limits)
        result = on_event(doc_id, text)
        return {
            "doc_id": doc_id,
            "symbol_count": len(result.symbols),
            "completion_count": len(result.completions),
        }

    return handler


def _symbols_handler(workspace: AnalysisWorkspace) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        doc_id = _require_doc_id(arguments, "document.symbols")
        return {
            "doc_id": doc_id,
            "symbols": [symbol.to_dict() for symbol in workspace.get_symbols(doc_id)],
        }

    return handler


def _completions_handler(workspace: AnalysisWorkspace) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        doc_id_value = arguments.get("doc_id")
        if doc_id_value is not None and not isinstance(doc_id_value, str):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="document.completions doc_id must be a string.",
            )
        return {"items": [entry.to_dict() for entry in workspace.get_completions(doc_id_value)]}

    return handler


def _semantic_tokens_handler(workspace: AnalysisWorkspace, limits: AnalyzerLimits) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        text = _require_text(arguments, "document.semantic_tokens")
        encoded_value = arguments.get("encoded", False)
        if not isinstance(encoded_value, bool):
            raise ToolDispatchError(
                code="INVALID_PARAMS",
                message="document.semantic_tokens encoded must be a boolean.",
            )
        enforce_document_limits(text, limits)
        spans = workspace.get_tokens(text)
        response: dict[str, object] = {
            "strategy": workspace.token_strategy,
            "tokens": [span.to_dict() for span in spans],
        }
        if encoded_value:
            response["data"] = workspace.token_legend().encode(spans)
        return response

    return handler


def _token_legend_handler(workspace: AnalysisWorkspace) -> ToolHandler:
    def handler(_: dict[str, object]) -> dict[str, object]:
        return workspace.token_legend().to_dict()

    return handler


def _audit_log_handler(
    read_audit_entries: Callable[[str | None, int], list[dict[str, object]]],
) -> ToolHandler:
    def handler(arguments: dict[str, object]) -> dict[str, object]:
        since_value = arguments.get("since")
        limit_value = arguments.get("limit", DEFAULT_AUDIT_LIMIT)

        since: str | None = since_value if isinstance(since_value, str) else None
        limit = limit_value if isinstance(limit_value, int) else DEFAULT_AUDIT_LIMIT
        limit = max(1, min(limit, MAX_AUDIT_LIMIT))

        return {"entries": read_audit_entries(since, limit)}

    return handler


def _require_doc_id(arguments: dict[str, object], tool_name: str) -> str:
    doc_id = arguments.get("doc_id")
    if not isinstance(doc_id, str) or not doc_id:
        raise ToolDispatchError(
            code="INVALID_PARAMS",
            message=f"{tool_name} doc_id must be a non-empty string.",
        )
    return doc_id


def _require_text(arguments: dict[str, object], tool_name: str) -> str:
    text = arguments.get("text")
    if not isinstance(text, str):
        raise ToolDispatchError(
            code="INVALID_PARAMS",
            message=f"{tool_name} text must be a string.",
        )
    return text
