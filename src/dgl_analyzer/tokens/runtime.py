"""Runtime token classifier construction."""

from __future__ import annotations

from dgl_analyzer.scanner.patterns import PatternSet
from dgl_analyzer.tokens.annotation import AnnotationTokenClassifier
from dgl_analyzer.tokens.declarations import DeclarationTokenClassifier
from dgl_analyzer.tokens.registry import ClassifierRegistry

TOKEN_STRATEGY_ANNOTATION = "annotation"
TOKEN_STRATEGY_DECLARATIONS = "declarations"
TOKEN_STRATEGIES = (TOKEN_STRATEGY_ANNOTATION, TOKEN_STRATEGY_DECLARATIONS)


def build_classifier_registry(patterns: PatternSet | None = None) -> ClassifierRegistry:
    """Build the closed set of token classification strategies."""
    registry = ClassifierRegistry()
    registry.register(AnnotationTokenClassifier())
    registry.register(DeclarationTokenClassifier(patterns))
    return registry
