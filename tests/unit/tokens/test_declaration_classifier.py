from __future__ import annotations

from dgl_analyzer.scanner import DEFAULT_PATTERNS
from dgl_analyzer.tokens import DeclarationTokenClassifier, collect_declared_names


def _triples(spans) -> list[tuple[int, int, int, str]]:
    return [(s.line, s.start_character, s.length, s.token_type) for s in spans]


def test_variable_classification_overrides_function() -> None:
    text = "func add(\n  var add\n  add := add + 1\nendfunc\n"

    spans = DeclarationTokenClassifier().classify(text)

    assert _triples(spans) == [
        (0, 5, 3, "variable"),
        (1, 6, 3, "variable"),
        (2, 2, 3, "variable"),
        (2, 9, 3, "variable"),
    ]


def test_constant_overrides_function_but_not_variable() -> None:
    text = "func LIMIT(\n#constant LIMIT 4\nLIMIT\n"

    spans = DeclarationTokenClassifier().classify(text)

    assert {s.token_type for s in spans} == {"property"}
    assert len(spans) == 3


def test_each_declared_kind_gets_its_own_type() -> None:
    text = "#constant MAX 8\nvar count\nfunc tick(\ncount := MAX\ntick()\nendfunc\n"

    spans = DeclarationTokenClassifier().classify(text)

    assert _triples(spans) == [
        (0, 10, 3, "property"),
        (1, 4, 5, "variable"),
        (2, 5, 4, "function"),
        (3, 0, 5, "variable"),
        (3, 9, 3, "property"),
        (4, 0, 4, "function"),
    ]
    assert all(s.token_modifiers == () for s in spans)


def test_only_whole_word_runs_are_classified() -> None:
    spans = DeclarationTokenClassifier().classify("var x\nxx x_1 x.x\n")

    assert _triples(spans) == [
        (0, 4, 1, "variable"),
        (1, 7, 1, "variable"),
        (1, 9, 1, "variable"),
    ]


def test_collection_has_no_scope_logic() -> None:
    lines = ["func open(", "var inner", "func other("]

    names = collect_declared_names(lines, DEFAULT_PATTERNS)

    assert names.functions == {"open", "other"}
    assert names.variables == {"inner"}
    assert names.constants == set()


def test_text_without_declarations_yields_no_spans() -> None:
    assert DeclarationTokenClassifier().classify("gfx_Cls();\n[function]\n") == []


def test_every_constant_on_a_line_is_collected() -> None:
    names = collect_declared_names(["word A byte B"], DEFAULT_PATTERNS)

    assert names.constants == {"A", "B"}


def test_constant_following_valueless_constant_is_classified() -> None:
    spans = DeclarationTokenClassifier().classify("word A byte B\nB\n")

    assert _triples(spans) == [
        (0, 5, 1, "property"),
        (0, 12, 1, "property"),
        (1, 0, 1, "property"),
    ]


def test_non_ascii_function_name_is_classified() -> None:
    spans = DeclarationTokenClassifier().classify("func ñ(\nñ()\n")

    assert _triples(spans) == [
        (0, 5, 1, "function"),
        (1, 0, 1, "function"),
    ]
