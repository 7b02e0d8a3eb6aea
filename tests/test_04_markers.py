"""Marker lookup, inline payload unwrapping and equality rewriting."""

import pytest

from jsnet.ast import Annotation, Pos
from jsnet.backend.attributes import (
    ENTRY_POINT,
    EXCLUDE,
    INLINE_OVERRIDE,
    find_marker,
    inline_payload,
    is_excluded,
    unwrap_literal,
)
from jsnet.backend.equality import strict_equality


def ann(name: str, *args: str) -> Annotation:
    return Annotation(Pos(1, 1), name, list(args))


def test_find_marker_is_case_insensitive_and_trimmed():
    anns = [ann("Serializable"), ann("  entrypoint ")]
    assert find_marker(anns, ENTRY_POINT) is anns[1]


def test_find_marker_requires_exact_name():
    anns = [ann("ExcludeAttribute"), ann("Js.Exclude"), ann("Excluded")]
    assert find_marker(anns, EXCLUDE) is None
    assert not is_excluded(anns)


def test_find_marker_returns_first_match():
    first = ann("JSFunction", '"a();"')
    second = ann("InlineOverride", '"b();"')
    assert find_marker([first, second], INLINE_OVERRIDE) is first
    assert find_marker([second, first], INLINE_OVERRIDE) is second


def test_find_marker_empty_list():
    assert find_marker([], EXCLUDE) is None


def test_inline_payload():
    assert inline_payload(ann("JSFunction", '@"x();"', '"ignored"')) == '@"x();"'
    assert inline_payload(ann("JSFunction")) == ""


@pytest.mark.parametrize(
    "text,expected",
    [
        ('@"console.log(1);"', "console.log(1);"),
        ('"return 1;"', "return 1;"),
        ('$@"{a}"', "{a}"),
        ('@"say ""hi"""', 'say ""hi""'),
        ("bare", "bare"),
        ('"', ""),
        ("", ""),
    ],
)
def test_unwrap_literal(text: str, expected: str):
    assert unwrap_literal(text) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("if (a == b) x();", "if (a === b) x();"),
        ("return a != b;", "return a !== b;"),
        ("x = y;", "x = y;"),
        ("a <= b && c >= d", "a <= b && c >= d"),
        ('s == "a==b"', 's === "a===b"'),
        ("// a != b", "// a !== b"),
        ("a === b", "a ==== b"),
    ],
)
def test_strict_equality(text: str, expected: str):
    assert strict_equality(text) == expected
