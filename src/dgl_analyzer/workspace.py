"""Host-facing document events and queries."""

from __future__ import annotations

from dgl_analyzer.scanner import CompletionEntry, DeclarationScanner, ScanResult, Symbol
from dgl_analyzer.store import COMPLETION_SCOPE_GLOBAL, ResultStore
from dgl_analyzer.tokens import (
    DEFAULT_LEGEND,
    TOKEN_STRATEGY_DECLARATIONS,
    ClassifierRegistry,
    TokenClassifier,
    TokenLegend,
    TokenSpan,
    build_classifier_registry,
)


class AnalysisWorkspace:
    """Wire document events through the scanner into the result store.

    Every open or change event runs a full scan of the supplied text; the
    latest scan for a document always supersedes earlier ones.
    """

    def __init__(
        self,
        *,
        token_strategy: str = TOKEN_STRATEGY_DECLARATIONS,
        completion_scope: str = COMPLETION_SCOPE_GLOBAL,
        scanner: DeclarationScanner | None = None,
        classifiers: ClassifierRegistry | None = None,
        legend: TokenLegend = DEFAULT_LEGEND,
    ) -> None:
        self._scanner = scanner or DeclarationScanner()
        self._store = ResultStore(completion_scope=completion_scope)
        self._classifiers = classifiers or build_classifier_registry(self._scanner.patterns)
        self._classifier: TokenClassifier = self._classifiers.select(token_strategy)
        self._legend = legend

    @property
    def store(self) -> ResultStore:
        return self._store

    @property
    def token_strategy(self) -> str:
        return self._classifier.name

    @property
    def completion_scope(self) -> str:
        return self._store.completion_scope

    def on_document_opened(self, doc_id: str, text: str) -> ScanResult:
        """Scan a newly opened document and publish its results."""
        return self._rescan(doc_id, text)

    def on_document_changed(self, doc_id: str, text: str) -> ScanResult:
        """Rescan a document from its complete new text."""
        return self._rescan(doc_id, text)

    def get_symbols(self, doc_id: str) -> tuple[Symbol, ...]:
        return self._store.get(doc_id)

    def get_completions(self, doc_id: str | None = None) -> tuple[CompletionEntry, ...]:
        """Return completions; cursor position and prefix are left to the host."""
        return self._store.get_completions(doc_id)

    def get_tokens(self, text: str) -> list[TokenSpan]:
        """Classify raw text with the configured strategy."""
        return self._classifier.classify(text)

    def token_legend(self) -> TokenLegend:
        return self._legend

    def _rescan(self, doc_id: str, text: str) -> ScanResult:
        result = self._scanner.scan(text)
        self._store.record_scan(doc_id, result)
        return result
