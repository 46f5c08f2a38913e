from __future__ import annotations

import pytest

from dgl_analyzer.tokens import (
    AnnotationTokenClassifier,
    ClassifierRegistry,
    DeclarationTokenClassifier,
    build_classifier_registry,
)


def test_runtime_registry_exposes_both_strategies_in_order() -> None:
    registry = build_classifier_registry()

    assert registry.names() == ("annotation", "declarations")
    assert isinstance(registry.select("annotation"), AnnotationTokenClassifier)
    assert isinstance(registry.select("declarations"), DeclarationTokenClassifier)


def test_strategies_are_interchangeable_on_the_same_text() -> None:
    registry = build_classifier_registry()
    text = "var [variable] x\n"

    annotation = registry.select("annotation").classify(text)
    declarations = registry.select("declarations").classify(text)

    assert [(s.start_character, s.token_type) for s in annotation] == [(5, "variable")]
    assert declarations == []


def test_unknown_strategy_raises_lookup_error() -> None:
    registry = ClassifierRegistry()

    with pytest.raises(LookupError, match="No token classifier named: missing"):
        registry.select("missing")
