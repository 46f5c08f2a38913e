"""Lexical patterns recognising 4DGL declarations."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

_LINE_BREAK_RE: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")


@dataclass(slots=True, frozen=True)
class PatternSet:
    """Compiled declaration patterns used by scanners and classifiers.

    Each declaration pattern captures the declared identifier in group 1.
    ``constant`` additionally captures an optional value token in group 2
    (after ``=`` or ``:=``) or group 3 (after plain whitespace).
    """

    function_start: re.Pattern[str]
    function_end: re.Pattern[str]
    variable: re.Pattern[str]
    constant: re.Pattern[str]


_IDENTIFIER = r"([^\W\d]\w*)"
_CONSTANT_KEYWORD = r"(?:#constant|word|byte)"
# A value stops at ";" or "//" and never swallows the next constant keyword.
_CONSTANT_VALUE = rf"(?!{_CONSTANT_KEYWORD}\b)((?:(?!//)[^\s;])+)"

DEFAULT_PATTERNS: Final[PatternSet] = PatternSet(
    function_start=re.compile(rf"\bfunc\s+{_IDENTIFIER}\s*\("),
    function_end=re.compile(r"\bendfunc\b"),
    variable=re.compile(rf"\bvar\s+\*?\s*{_IDENTIFIER}"),
    constant=re.compile(
        rf"(?<![\w#]){_CONSTANT_KEYWORD}[ \t]+{_IDENTIFIER}"
        rf"(?:[ \t]*:?=[ \t]*{_CONSTANT_VALUE}|[ \t]+{_CONSTANT_VALUE})?"
    ),
)


def split_lines(text: str) -> list[str]:
    """Split text on CR, LF, or CRLF without dropping a trailing empty line."""
    return _LINE_BREAK_RE.split(text)
