"""Value types for declaration outlines and completion entries."""

from __future__ import annotations

from dataclasses import dataclass

FUNCTION = "function"
VARIABLE = "variable"
CONSTANT = "constant"

# LSP SymbolKind / CompletionItemKind codes exposed to the host.
SYMBOL_KIND_CODES: dict[str, int] = {
    FUNCTION: 12,
    VARIABLE: 13,
    CONSTANT: 14,
}
COMPLETION_KIND_CODES: dict[str, int] = {
    FUNCTION: 3,
}


@dataclass(slots=True, frozen=True, order=True)
class Position:
    """Zero-based line/character position."""

    line: int
    character: int


@dataclass(slots=True, frozen=True)
class Range:
    """Half-open span between two positions."""

    start: Position
    end: Position

    @classmethod
    def on_line(cls, line: int, start: int, end: int) -> Range:
        """Build a range that stays on a single line."""
        return cls(Position(line, start), Position(line, end))

    def contains(self, other: Range) -> bool:
        """Return True when other lies entirely within this range."""
        return self.start <= other.start and other.end <= self.end

    def to_dict(self) -> dict[str, object]:
        return {
            "start": {"line": self.start.line, "character": self.start.character},
            "end": {"line": self.end.line, "character": self.end.character},
        }


@dataclass(slots=True, frozen=True)
class Symbol:
    """Single node in a document outline."""

    name: str
    detail: str
    kind: str
    full_range: Range
    selection_range: Range
    children: tuple[Symbol, ...] = ()

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-ready nested representation."""
        return {
            "name": self.name,
            "detail": self.detail,
            "kind": self.kind,
            "kind_code": SYMBOL_KIND_CODES[self.kind],
            "range": self.full_range.to_dict(),
            "selection_range": self.selection_range.to_dict(),
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(slots=True, frozen=True)
class CompletionEntry:
    """Completable identifier offered to the host."""

    name: str
    kind: str = FUNCTION

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "kind": self.kind,
            "kind_code": COMPLETION_KIND_CODES[self.kind],
        }


@dataclass(slots=True, frozen=True)
class ScanResult:
    """Outline and completions produced by one scan."""

    symbols: tuple[Symbol, ...]
    completions: tuple[CompletionEntry, ...]
