"""Semantic token vocabulary and integer encoding.

The type and modifier tables are an append-only contract with the host:
encoded values are table indices, so reordering an existing entry changes
the meaning of every previously encoded token.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

TOKEN_TYPES: Final[tuple[str, ...]] = (
    "comment",
    "string",
    "keyword",
    "number",
    "regexp",
    "operator",
    "namespace",
    "type",
    "struct",
    "class",
    "interface",
    "enum",
    "typeParameter",
    "function",
    "member",
    "macro",
    "variable",
    "parameter",
    "property",
    "label",
)

TOKEN_MODIFIERS: Final[tuple[str, ...]] = (
    "declaration",
    "documentation",
    "readonly",
    "static",
    "abstract",
    "deprecated",
    "modification",
    "async",
)

NOT_IN_LEGEND: Final[str] = "notInLegend"


@dataclass(slots=True, frozen=True)
class TokenSpan:
    """Classified substring of a single line."""

    line: int
    start_character: int
    length: int
    token_type: str
    token_modifiers: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "line": self.line,
            "start_character": self.start_character,
            "length": self.length,
            "token_type": self.token_type,
            "token_modifiers": list(self.token_modifiers),
        }


@dataclass(slots=True, frozen=True)
class TokenLegend:
    """Ordered type and modifier tables shared with the host."""

    token_types: tuple[str, ...] = TOKEN_TYPES
    token_modifiers: tuple[str, ...] = TOKEN_MODIFIERS

    def encode_type(self, token_type: str) -> int:
        """Return the table index for a type name.

        Unknown names map to 0; the sentinel maps two past the end.
        """
        if token_type in self.token_types:
            return self.token_types.index(token_type)
        if token_type == NOT_IN_LEGEND:
            return len(self.token_types) + 2
        return 0

    def encode_modifiers(self, token_modifiers: tuple[str, ...] | list[str]) -> int:
        """Return a bitmask with one bit per recognised modifier."""
        result = 0
        for modifier in token_modifiers:
            if modifier in self.token_modifiers:
                result |= 1 << self.token_modifiers.index(modifier)
            elif modifier == NOT_IN_LEGEND:
                result |= 1 << (len(self.token_modifiers) + 2)
        return result

    def encode(self, spans: list[TokenSpan]) -> list[int]:
        """Encode spans as the relative five-integer stream used by LSP hosts."""
        data: list[int] = []
        previous_line = 0
        previous_start = 0
        for span in sorted(spans, key=lambda item: (item.line, item.start_character)):
            delta_line = span.line - previous_line
            delta_start = (
                span.start_character - previous_start if delta_line == 0 else span.start_character
            )
            data.extend(
                (
                    delta_line,
                    delta_start,
                    span.length,
                    self.encode_type(span.token_type),
                    self.encode_modifiers(span.token_modifiers),
                )
            )
            previous_line = span.line
            previous_start = span.start_character
        return data

    def to_dict(self) -> dict[str, object]:
        return {
            "token_types": list(self.token_types),
            "token_modifiers": list(self.token_modifiers),
        }


DEFAULT_LEGEND: Final[TokenLegend] = TokenLegend()


def encode_token_type(token_type: str) -> int:
    """Encode a type name against the default legend."""
    return DEFAULT_LEGEND.encode_type(token_type)


def encode_token_modifiers(token_modifiers: tuple[str, ...] | list[str]) -> int:
    """Encode modifier names against the default legend."""
    return DEFAULT_LEGEND.encode_modifiers(token_modifiers)


def encode_semantic_tokens(spans: list[TokenSpan]) -> list[int]:
    """Encode spans against the default legend."""
    return DEFAULT_LEGEND.encode(spans)
