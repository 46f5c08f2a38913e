"""Semantic token classification strategies."""

from .annotation import AnnotationTokenClassifier, parse_annotation
from .declarations import DeclarationTokenClassifier, DeclaredNames, collect_declared_names
from .legend import (
    DEFAULT_LEGEND,
    NOT_IN_LEGEND,
    TOKEN_MODIFIERS,
    TOKEN_TYPES,
    TokenLegend,
    TokenSpan,
    encode_semantic_tokens,
    encode_token_modifiers,
    encode_token_type,
)
from .registry import ClassifierRegistry, TokenClassifier
from .runtime import (
    TOKEN_STRATEGIES,
    TOKEN_STRATEGY_ANNOTATION,
    TOKEN_STRATEGY_DECLARATIONS,
    build_classifier_registry,
)

__all__ = [
    "AnnotationTokenClassifier",
    "ClassifierRegistry",
    "DEFAULT_LEGEND",
    "DeclarationTokenClassifier",
    "DeclaredNames",
    "NOT_IN_LEGEND",
    "TOKEN_MODIFIERS",
    "TOKEN_STRATEGIES",
    "TOKEN_STRATEGY_ANNOTATION",
    "TOKEN_STRATEGY_DECLARATIONS",
    "TOKEN_TYPES",
    "TokenClassifier",
    "TokenLegend",
    "TokenSpan",
    "build_classifier_registry",
    "collect_declared_names",
    "encode_semantic_tokens",
    "encode_token_modifiers",
    "encode_token_type",
    "parse_annotation",
]
