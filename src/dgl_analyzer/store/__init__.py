"""Result storage for scanned documents."""

from .results import (
    COMPLETION_SCOPE_DOCUMENT,
    COMPLETION_SCOPE_GLOBAL,
    COMPLETION_SCOPES,
    ResultStore,
)

__all__ = [
    "COMPLETION_SCOPE_DOCUMENT",
    "COMPLETION_SCOPE_GLOBAL",
    "COMPLETION_SCOPES",
    "ResultStore",
]
