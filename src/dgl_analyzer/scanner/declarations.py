"""Line-oriented declaration scanner producing outlines and completions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from dgl_analyzer.scanner.models import (
    CONSTANT,
    FUNCTION,
    VARIABLE,
    CompletionEntry,
    Position,
    Range,
    ScanResult,
    Symbol,
)
from dgl_analyzer.scanner.patterns import DEFAULT_PATTERNS, PatternSet, split_lines


@dataclass(slots=True)
class PendingFunction:
    """Function whose end marker has not been seen yet."""

    name: str
    full_range: Range
    selection_range: Range
    children: list[Symbol] = field(default_factory=list)

    def close(self, end: Position) -> Symbol:
        """Return the finished function symbol ending at ``end``."""
        return Symbol(
            name=self.name,
            detail="",
            kind=FUNCTION,
            full_range=Range(self.full_range.start, end),
            selection_range=self.selection_range,
            children=tuple(self.children),
        )


class DeclarationScanner:
    """Scan 4DGL source text for functions, variables, and constants.

    Only one function scope is tracked at a time. A new ``func`` line
    replaces any scope still open, and a scope that never reaches
    ``endfunc`` is dropped along with its children.
    """

    def __init__(self, patterns: PatternSet | None = None) -> None:
        self._patterns = patterns or DEFAULT_PATTERNS

    @property
    def patterns(self) -> PatternSet:
        return self._patterns

    def scan(self, text: str) -> ScanResult:
        """Return the outline and completion entries for one document."""
        symbols: list[Symbol] = []
        completions: list[CompletionEntry] = []
        pending: PendingFunction | None = None

        for line_number, line in enumerate(split_lines(text)):
            if not line.strip():
                continue

            start_match = self._patterns.function_start.search(line)
            if start_match is not None:
                name = start_match.group(1)
                completions.append(CompletionEntry(name=name, kind=FUNCTION))
                pending = PendingFunction(
                    name=name,
                    full_range=Range.on_line(line_number, 0, len(line)),
                    selection_range=_group_range(start_match, 1, line_number),
                )

            if pending is not None and self._patterns.function_end.search(line) is not None:
                symbols.append(pending.close(Position(line_number, len(line))))
                pending = None

            for variable_match in self._patterns.variable.finditer(line):
                identifier = _group_range(variable_match, 1, line_number)
                variable = Symbol(
                    name=variable_match.group(1),
                    detail="",
                    kind=VARIABLE,
                    full_range=identifier,
                    selection_range=identifier,
                )
                if pending is not None:
                    pending.children.append(variable)
                else:
                    symbols.append(variable)

            constant_match = self._patterns.constant.search(line)
            if constant_match is not None:
                identifier = _group_range(constant_match, 1, line_number)
                symbols.append(
                    Symbol(
                        name=constant_match.group(1),
                        detail=constant_match.group(2) or constant_match.group(3) or "",
                        kind=CONSTANT,
                        full_range=identifier,
                        selection_range=identifier,
                    )
                )

        return ScanResult(symbols=tuple(symbols), completions=tuple(completions))


def _group_range(match: re.Match[str], group: int, line_number: int) -> Range:
    return Range.on_line(line_number, match.start(group), match.end(group))
