"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from dgl_analyzer.limits import AnalyzerLimits
from dgl_analyzer.store import COMPLETION_SCOPE_GLOBAL, COMPLETION_SCOPES
from dgl_analyzer.tokens import TOKEN_STRATEGIES, TOKEN_STRATEGY_DECLARATIONS

CONFIG_FILE_NAME = "dgl_analyzer.toml"
DEFAULT_DATA_DIR_NAME = ".dgl_analyzer"

MAX_DOCUMENT_BYTES_CAP = 8 * 1024 * 1024
MAX_TOTAL_BYTES_PER_RESPONSE_CAP = 4 * 1024 * 1024


@dataclass(slots=True, frozen=True)
class TokensConfig:
    """Semantic token strategy selection."""

    strategy: str


@dataclass(slots=True, frozen=True)
class CompletionsConfig:
    """Completion storage scope."""

    scope: str


@dataclass(slots=True, frozen=True)
class ServerConfig:
    """Fully merged server configuration."""

    workspace_root: Path
    data_dir: Path
    limits: AnalyzerLimits
    tokens: TokensConfig
    completions: CompletionsConfig

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot for tool responses."""
        return {
            "workspace_root": str(self.workspace_root),
            "data_dir": str(self.data_dir),
            "limits": {
                "max_document_bytes": self.limits.max_document_bytes,
                "max_total_bytes_per_response": self.limits.max_total_bytes_per_response,
            },
            "tokens": {
                "strategy": self.tokens.strategy,
            },
            "completions": {
                "scope": self.completions.scope,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    data_dir: Path | None = None
    max_document_bytes: int | None = None
    max_total_bytes_per_response: int | None = None
    token_strategy: str | None = None
    completion_scope: str | None = None


def default_config(workspace_root: Path) -> ServerConfig:
    """Build default config for a given workspace root."""
    resolved_root = workspace_root.resolve()
    return ServerConfig(
        workspace_root=resolved_root,
        data_dir=resolved_root / DEFAULT_DATA_DIR_NAME,
        limits=AnalyzerLimits(),
        tokens=TokensConfig(strategy=TOKEN_STRATEGY_DECLARATIONS),
        completions=CompletionsConfig(scope=COMPLETION_SCOPE_GLOBAL),
    )


def load_workspace_config_file(workspace_root: Path) -> dict[str, object]:
    """Load optional dgl_analyzer.toml from the workspace root."""
    config_path = workspace_root / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def merge_config(
    base: ServerConfig, workspace_payload: dict[str, object], overrides: CliOverrides
) -> ServerConfig:
    """Merge defaults, workspace config, then CLI/startup overrides."""
    limits_payload = _get_table(workspace_payload, "limits")
    tokens_payload = _get_table(workspace_payload, "tokens")
    completions_payload = _get_table(workspace_payload, "completions")

    max_document_bytes = _optional_positive_int_with_cap(
        limits_payload.get("max_document_bytes"),
        "limits.max_document_bytes",
        base.limits.max_document_bytes,
        MAX_DOCUMENT_BYTES_CAP,
    )
    max_total_bytes_per_response = _optional_positive_int_with_cap(
        limits_payload.get("max_total_bytes_per_response"),
        "limits.max_total_bytes_per_response",
        base.limits.max_total_bytes_per_response,
        MAX_TOTAL_BYTES_PER_RESPONSE_CAP,
    )
    strategy = _optional_choice(
        tokens_payload.get("strategy"),
        "tokens.strategy",
        base.tokens.strategy,
        TOKEN_STRATEGIES,
    )
    scope = _optional_choice(
        completions_payload.get("scope"),
        "completions.scope",
        base.completions.scope,
        COMPLETION_SCOPES,
    )

    merged = ServerConfig(
        workspace_root=base.workspace_root,
        data_dir=base.data_dir,
        limits=AnalyzerLimits(
            max_document_bytes=max_document_bytes,
            max_total_bytes_per_response=max_total_bytes_per_response,
        ),
        tokens=TokensConfig(strategy=strategy),
        completions=CompletionsConfig(scope=scope),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: ServerConfig, overrides: CliOverrides) -> ServerConfig:
    """Apply startup overrides at highest precedence."""
    max_document_bytes = _optional_positive_int_with_cap(
        overrides.max_document_bytes,
        "overrides.max_document_bytes",
        config.limits.max_document_bytes,
        MAX_DOCUMENT_BYTES_CAP,
    )
    max_total_bytes_per_response = _optional_positive_int_with_cap(
        overrides.max_total_bytes_per_response,
        "overrides.max_total_bytes_per_response",
        config.limits.max_total_bytes_per_response,
        MAX_TOTAL_BYTES_PER_RESPONSE_CAP,
    )
    strategy = _optional_choice(
        overrides.token_strategy,
        "overrides.token_strategy",
        config.tokens.strategy,
        TOKEN_STRATEGIES,
    )
    scope = _optional_choice(
        overrides.completion_scope,
        "overrides.completion_scope",
        config.completions.scope,
        COMPLETION_SCOPES,
    )
    data_dir = overrides.data_dir or config.data_dir
    return ServerConfig(
        workspace_root=config.workspace_root,
        data_dir=data_dir.resolve(),
        limits=AnalyzerLimits(
            max_document_bytes=max_document_bytes,
            max_total_bytes_per_response=max_total_bytes_per_response,
        ),
        tokens=TokensConfig(strategy=strategy),
        completions=CompletionsConfig(scope=scope),
    )


def load_effective_config(
    workspace_root: Path, overrides: CliOverrides | None = None
) -> ServerConfig:
    """Load effective config using merge order defaults -> workspace config -> overrides."""
    resolved_root = workspace_root.resolve()
    base = default_config(resolved_root)
    payload = load_workspace_config_file(resolved_root)
    return merge_config(base, payload, overrides or CliOverrides())


def _optional_positive_int_with_cap(
    value: object,
    name: str,
    default: int,
    cap: int | None,
) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    if cap is not None and value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value


def _optional_choice(
    value: object,
    name: str,
    default: str,
    choices: tuple[str, ...],
) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or value not in choices:
        raise ValueError(f"Config field '{name}' must be one of {', '.join(choices)}.")
    return value
