"""Bracket annotation token classifier.

Text such as ``foo [variable.readonly] bar`` yields one span covering the
bracket interior, with the first dot segment as the type and the rest as
modifiers.
"""

from __future__ import annotations

from dgl_analyzer.scanner.patterns import split_lines
from dgl_analyzer.tokens.legend import TokenSpan


class AnnotationTokenClassifier:
    """Classify ``[type.modifier...]`` annotations line by line."""

    name = "annotation"

    def classify(self, text: str) -> list[TokenSpan]:
        """Return spans for every reachable bracket pair."""
        spans: list[TokenSpan] = []
        for line_number, line in enumerate(split_lines(text)):
            offset = 0
            while True:
                open_offset = line.find("[", offset)
                if open_offset == -1:
                    break
                close_offset = line.find("]", open_offset)
                if close_offset == -1:
                    break
                token_type, token_modifiers = parse_annotation(
                    line[open_offset + 1 : close_offset]
                )
                spans.append(
                    TokenSpan(
                        line=line_number,
                        start_character=open_offset + 1,
                        length=close_offset - open_offset - 1,
                        token_type=token_type,
                        token_modifiers=token_modifiers,
                    )
                )
                offset = close_offset
        return spans


def parse_annotation(text: str) -> tuple[str, tuple[str, ...]]:
    """Split ``type.mod1.mod2`` into its type and modifiers."""
    parts = text.split(".")
    return parts[0], tuple(parts[1:])
