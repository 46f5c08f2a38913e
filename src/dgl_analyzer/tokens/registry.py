"""Token classifier protocol and strategy registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from dgl_analyzer.tokens.legend import TokenSpan


class TokenClassifier(Protocol):
    """Protocol implemented by token classification strategies."""

    name: str

    def classify(self, text: str) -> list[TokenSpan]:
        """Return classified spans for raw document text."""


@dataclass(slots=True)
class ClassifierRegistry:
    """Named strategies in deterministic registration order."""

    _classifiers: dict[str, TokenClassifier] = field(default_factory=dict)

    def register(self, classifier: TokenClassifier) -> None:
        """Register a strategy under its own name."""
        self._classifiers[classifier.name] = classifier

    def select(self, name: str) -> TokenClassifier:
        """Return the strategy registered under name."""
        classifier = self._classifiers.get(name)
        if classifier is None:
            raise LookupError(f"No token classifier named: {name}")
        return classifier

    def names(self) -> tuple[str, ...]:
        """Return registered strategy names in deterministic order."""
        return tuple(self._classifiers.keys())
