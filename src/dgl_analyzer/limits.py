"""Size limits applied to documents and responses at the host boundary."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class AnalyzerLimits:
    """Runtime limits for accepted documents and tool responses."""

    max_document_bytes: int = 1024 * 1024
    max_total_bytes_per_response: int = 1024 * 1024


@dataclass(slots=True, frozen=True)
class PolicyBlockedError(Exception):
    """Raised when limits policy blocks an operation."""

    reason: str
    hint: str


def enforce_document_limits(text: str, limits: AnalyzerLimits) -> None:
    """Raise PolicyBlockedError when document text exceeds max_document_bytes."""
    size = len(text.encode("utf-8"))
    if size > limits.max_document_bytes:
        raise PolicyBlockedError(
            reason="Document exceeds max_document_bytes limit.",
            hint="Send a smaller document or raise limits.max_document_bytes.",
        )
