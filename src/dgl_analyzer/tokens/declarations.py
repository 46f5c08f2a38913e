"""Collect-then-classify token classifier driven by declaration patterns."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from dgl_analyzer.scanner.patterns import DEFAULT_PATTERNS, PatternSet, split_lines
from dgl_analyzer.tokens.legend import TokenSpan

_RUN_RE = re.compile(r"\w+|\W+")


@dataclass(slots=True)
class DeclaredNames:
    """Identifier sets collected from a whole document."""

    functions: set[str] = field(default_factory=set)
    constants: set[str] = field(default_factory=set)
    variables: set[str] = field(default_factory=set)

    def classify(self, word: str) -> str | None:
        # Later checks overwrite earlier ones: variable > property > function.
        token_type: str | None = None
        if word in self.functions:
            token_type = "function"
        if word in self.constants:
            token_type = "property"
        if word in self.variables:
            token_type = "variable"
        return token_type


def collect_declared_names(lines: list[str], patterns: PatternSet) -> DeclaredNames:
    """Collect declared identifiers without any scope tracking."""
    names = DeclaredNames()
    for line in lines:
        for match in patterns.constant.finditer(line):
            names.constants.add(match.group(1))
        for match in patterns.variable.finditer(line):
            names.variables.add(match.group(1))
        for match in patterns.function_start.finditer(line):
            names.functions.add(match.group(1))
    return names


class DeclarationTokenClassifier:
    """Classify every occurrence of a declared identifier."""

    name = "declarations"

    def __init__(self, patterns: PatternSet | None = None) -> None:
        self._patterns = patterns or DEFAULT_PATTERNS

    def classify(self, text: str) -> list[TokenSpan]:
        """Return spans for word runs matching a collected declaration."""
        lines = split_lines(text)
        names = collect_declared_names(lines, self._patterns)
        spans: list[TokenSpan] = []
        for line_number, line in enumerate(lines):
            for run in _RUN_RE.finditer(line):
                word = run.group(0)
                token_type = names.classify(word)
                if token_type is None:
                    continue
                spans.append(
                    TokenSpan(
                        line=line_number,
                        start_character=run.start(),
                        length=len(word),
                        token_type=token_type,
                    )
                )
        return spans
