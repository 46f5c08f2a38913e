"""Process-wide store for the latest scan results."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from dgl_analyzer.scanner.models import CompletionEntry, ScanResult, Symbol

COMPLETION_SCOPE_GLOBAL = "global"
COMPLETION_SCOPE_DOCUMENT = "document"
COMPLETION_SCOPES = (COMPLETION_SCOPE_GLOBAL, COMPLETION_SCOPE_DOCUMENT)


@dataclass(slots=True)
class ResultStore:
    """Latest symbol tree per document plus completion entries.

    In ``global`` scope a single completion slot is shared by every
    document and the most recent scan wins. In ``document`` scope
    completions are keyed by document id like the symbol trees.
    Entries are never evicted.
    """

    completion_scope: str = COMPLETION_SCOPE_GLOBAL
    _trees: dict[str, tuple[Symbol, ...]] = field(default_factory=dict)
    _global_completions: tuple[CompletionEntry, ...] = ()
    _document_completions: dict[str, tuple[CompletionEntry, ...]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.completion_scope not in COMPLETION_SCOPES:
            raise ValueError(
                f"Unknown completion scope '{self.completion_scope}'; "
                f"expected one of {', '.join(COMPLETION_SCOPES)}."
            )

    def put(self, doc_id: str, tree: tuple[Symbol, ...]) -> None:
        """Overwrite the symbol tree stored for a document."""
        with self._lock:
            self._trees[doc_id] = tuple(tree)

    def get(self, doc_id: str) -> tuple[Symbol, ...]:
        """Return the stored tree, or an empty tuple for unknown documents."""
        return self._trees.get(doc_id, ())

    def set_completions(
        self,
        entries: tuple[CompletionEntry, ...],
        doc_id: str | None = None,
    ) -> None:
        """Replace completion entries for the configured scope."""
        with self._lock:
            self._set_completions_unlocked(tuple(entries), doc_id)

    def get_completions(self, doc_id: str | None = None) -> tuple[CompletionEntry, ...]:
        """Return completion entries; doc_id only matters in document scope."""
        if self.completion_scope == COMPLETION_SCOPE_GLOBAL:
            return self._global_completions
        if doc_id is None:
            return ()
        return self._document_completions.get(doc_id, ())

    def record_scan(self, doc_id: str, result: ScanResult) -> None:
        """Publish a scan's tree and completions together."""
        with self._lock:
            self._trees[doc_id] = result.symbols
            self._set_completions_unlocked(result.completions, doc_id)

    def document_ids(self) -> tuple[str, ...]:
        """Return scanned document ids in first-seen order."""
        return tuple(self._trees.keys())

    def _set_completions_unlocked(
        self,
        entries: tuple[CompletionEntry, ...],
        doc_id: str | None,
    ) -> None:
        if self.completion_scope == COMPLETION_SCOPE_GLOBAL:
            self._global_completions = entries
            return
        if doc_id is None:
            raise ValueError("doc_id is required when completion scope is 'document'.")
        self._document_completions[doc_id] = entries
