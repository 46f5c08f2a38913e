"""STDIO JSON-lines server entrypoint."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from dgl_analyzer.config import CliOverrides, ServerConfig, load_effective_config
from dgl_analyzer.limits import PolicyBlockedError
from dgl_analyzer.logging import AuditEvent, JsonlAuditLogger, sanitize_arguments, utc_timestamp
from dgl_analyzer.store import COMPLETION_SCOPES
from dgl_analyzer.tokens import TOKEN_STRATEGIES
from dgl_analyzer.tools import ToolDispatchError, ToolRegistry, register_builtin_tools
from dgl_analyzer.workspace import AnalysisWorkspace


@dataclass(slots=True, frozen=True)
class Request:
    """Normalized incoming request."""

    request_id: str
    method: str
    params: dict[str, object]


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for server startup configuration."""
    parser = argparse.ArgumentParser(prog="dgl-analyzer")
    parser.add_argument("--workspace-root", required=False, default=".")
    parser.add_argument("--data-dir", required=False, default=None)
    parser.add_argument("--max-document-bytes", type=int, required=False, default=None)
    parser.add_argument("--max-total-bytes-per-response", type=int, required=False, default=None)
    parser.add_argument("--token-strategy", choices=TOKEN_STRATEGIES, required=False, default=None)
    parser.add_argument(
        "--completion-scope", choices=COMPLETION_SCOPES, required=False, default=None
    )
    return parser


class StdioServer:
    """Line-delimited JSON server routing host requests to analysis tools."""

    def __init__(self, config: ServerConfig) -> None:
        self._config = config
        self._limits = config.limits
        self._workspace = AnalysisWorkspace(
            token_strategy=config.tokens.strategy,
            completion_scope=config.completions.scope,
        )
        self._audit_logger = JsonlAuditLogger(path=config.data_dir / "audit.jsonl")
        self._registry = ToolRegistry()
        register_builtin_tools(
            self._registry,
            workspace=self._workspace,
            limits=self._limits,
            read_audit_entries=self._audit_logger.read,
            config=self._config,
        )
        self._fallback_request_counter = 0

    @property
    def workspace(self) -> AnalysisWorkspace:
        return self._workspace

    @property
    def tool_names(self) -> tuple[str, ...]:
        return self._registry.names()

    def serve(self, in_stream: TextIO, out_stream: TextIO) -> None:
        """Process JSON-line requests from in_stream and write JSON-line responses."""
        for raw_line in in_stream:
            line = raw_line.strip()
            if not line:
                continue
            response = self.handle_json_line(line)
            out_stream.write(f"{json.dumps(response, sort_keys=True)}\n")
            out_stream.flush()

    def handle_json_line(self, raw_line: str) -> dict[str, object]:
        """Handle a single JSON-line request."""
        try:
            payload = json.loads(raw_line)
        except json.JSONDecodeError:
            request_id = self.next_request_id()
            response = self.error_response(
                request_id=request_id,
                code="INVALID_JSON",
                message="Request must be valid JSON.",
            )
            self.log_request(
                request_id=request_id,
                tool_name="invalid_json",
                arguments={"raw_line_length": len(raw_line)},
                response=response,
            )
            return response
        return self.handle_payload(payload)

    def handle_payload(self, payload: object) -> dict[str, object]:
        """Validate and dispatch a parsed payload."""
        parsed = self.parse_request(payload)
        if isinstance(parsed, dict):
            request_id_value = parsed.get("request_id")
            request_id = (
                request_id_value if isinstance(request_id_value, str) else self.next_request_id()
            )
            self.log_request(
                request_id=request_id,
                tool_name="invalid_request",
                arguments={},
                response=parsed,
            )
            return parsed

        request = parsed
        if request.method == "tools/call":
            tool_name_value = request.params.get("name")
            arguments_value = request.params.get("arguments", {})
            if not isinstance(tool_name_value, str) or not tool_name_value:
                return self.error_response(
                    request_id=request.request_id,
                    code="INVALID_PARAMS",
                    message="tools/call params.name must be a non-empty string.",
                )
            if not isinstance(arguments_value, dict):
                return self.error_response(
                    request_id=request.request_id,
                    code="INVALID_PARAMS",
                    message="tools/call params.arguments must be an object.",
                )
            tool_name = tool_name_value
            arguments: dict[str, object] = arguments_value
        else:
            tool_name = request.method
            arguments = request.params

        try:
            result = self._registry.dispatch(name=tool_name, arguments=arguments)
        except PolicyBlockedError as error:
            response = self.blocked_response(
                request_id=request.request_id,
                reason=error.reason,
                hint=error.hint,
            )
        except ToolDispatchError as error:
            response = self.error_response(
                request_id=request.request_id,
                code=error.code,
                message=error.message,
            )
        except Exception:
            response = self.error_response(
                request_id=request.request_id,
                code="INTERNAL_ERROR",
                message="Unhandled server error while executing tool.",
            )
        else:
            response = self.enforce_response_size_limit(
                request_id=request.request_id,
                response=self.success_response(request_id=request.request_id, result=result),
            )

        self.log_request(
            request_id=request.request_id,
            tool_name=tool_name,
            arguments=arguments,
            response=response,
        )
        return response

    def parse_request(self, payload: object) -> Request | dict[str, object]:
        """Validate request payload and return normalized Request."""
        if not isinstance(payload, dict):
            return self.error_response(
                request_id=self.next_request_id(),
                code="INVALID_REQUEST",
                message="Request must be an object.",
            )

        request_id = self.extract_request_id(payload.get("id"))
        method = payload.get("method")
        params = payload.get("params", {})

        if not isinstance(method, str) or not method:
            return self.error_response(
                request_id=request_id,
                code="INVALID_REQUEST",
                message="Request method must be a non-empty string.",
            )
        if not isinstance(params, dict):
            return self.error_response(
                request_id=request_id,
                code="INVALID_PARAMS",
                message="Request params must be an object.",
            )

        return Request(request_id=request_id, method=method, params=params)

    def extract_request_id(self, request_id: object) -> str:
        """Extract request ID from payload or synthesize a sequential fallback."""
        if isinstance(request_id, str) and request_id:
            return request_id
        if isinstance(request_id, int) and not isinstance(request_id, bool):
            return str(request_id)
        return self.next_request_id()

    def next_request_id(self) -> str:
        self._fallback_request_counter += 1
        return f"req-{self._fallback_request_counter:06d}"

    @staticmethod
    def success_response(
        request_id: str,
        result: dict[str, object],
        warnings: list[str] | None = None,
    ) -> dict[str, object]:
        """Build success envelope."""
        return {
            "request_id": request_id,
            "ok": True,
            "result": result,
            "warnings": warnings or [],
            "blocked": False,
        }

    @staticmethod
    def error_response(request_id: str, code: str, message: str) -> dict[str, object]:
        """Build explicit error envelope."""
        return {
            "request_id": request_id,
            "ok": False,
            "result": {},
            "warnings": [],
            "blocked": False,
            "error": {"code": code, "message": message},
        }

    @staticmethod
    def blocked_response(request_id: str, reason: str, hint: str) -> dict[str, object]:
        """Build explicit blocked response envelope."""
        return {
            "request_id": request_id,
            "ok": False,
            "result": {"reason": reason, "hint": hint},
            "warnings": [],
            "blocked": True,
            "error": {"code": "POLICY_BLOCKED", "message": reason},
        }

    def enforce_response_size_limit(
        self,
        request_id: str,
        response: dict[str, object],
    ) -> dict[str, object]:
        """Block responses that exceed max_total_bytes_per_response."""
        response_bytes = len(json.dumps(response, sort_keys=True).encode("utf-8"))
        if response_bytes <= self._limits.max_total_bytes_per_response:
            return response
        return self.blocked_response(
            request_id=request_id,
            reason="Response exceeds max_total_bytes_per_response limit.",
            hint="Split the document or raise limits.max_total_bytes_per_response.",
        )

    def log_request(
        self,
        request_id: str,
        tool_name: str,
        arguments: dict[str, object],
        response: dict[str, object],
    ) -> None:
        """Log one sanitized request event."""
        error_payload = response.get("error")
        error_code: str | None = None
        if isinstance(error_payload, dict):
            code_value = error_payload.get("code")
            if isinstance(code_value, str):
                error_code = code_value
        event = AuditEvent(
            timestamp=utc_timestamp(),
            request_id=request_id,
            tool=tool_name,
            ok=bool(response.get("ok", False)),
            blocked=bool(response.get("blocked", False)),
            error_code=error_code,
            metadata=sanitize_arguments(arguments),
        )
        self._audit_logger.append(event)


def create_server(
    workspace_root: str,
    data_dir: str | None = None,
    cli_overrides: CliOverrides | None = None,
) -> StdioServer:
    """Create a configured STDIO server instance."""
    overrides = cli_overrides or CliOverrides()
    if data_dir is not None and overrides.data_dir is None:
        overrides = CliOverrides(
            data_dir=Path(data_dir).resolve(),
            max_document_bytes=overrides.max_document_bytes,
            max_total_bytes_per_response=overrides.max_total_bytes_per_response,
            token_strategy=overrides.token_strategy,
            completion_scope=overrides.completion_scope,
        )
    config = load_effective_config(workspace_root=Path(workspace_root), overrides=overrides)
    return StdioServer(config=config)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the analyzer server process."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    overrides = CliOverrides(
        data_dir=Path(args.data_dir).resolve() if args.data_dir is not None else None,
        max_document_bytes=args.max_document_bytes,
        max_total_bytes_per_response=args.max_total_bytes_per_response,
        token_strategy=args.token_strategy,
        completion_scope=args.completion_scope,
    )
    server = create_server(workspace_root=args.workspace_root, cli_overrides=overrides)
    server.serve(in_stream=sys.stdin, out_stream=sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
