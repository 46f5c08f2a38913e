"""Declaration scanning for 4DGL source text."""

from .declarations import DeclarationScanner, PendingFunction
from .models import (
    COMPLETION_KIND_CODES,
    CONSTANT,
    FUNCTION,
    SYMBOL_KIND_CODES,
    VARIABLE,
    CompletionEntry,
    Position,
    Range,
    ScanResult,
    Symbol,
)
from .patterns import DEFAULT_PATTERNS, PatternSet, split_lines

__all__ = [
    "COMPLETION_KIND_CODES",
    "CONSTANT",
    "CompletionEntry",
    "DEFAULT_PATTERNS",
    "DeclarationScanner",
    "FUNCTION",
    "PatternSet",
    "PendingFunction",
    "Position",
    "Range",
    "SYMBOL_KIND_CODES",
    "ScanResult",
    "Symbol",
    "VARIABLE",
    "split_lines",
]
