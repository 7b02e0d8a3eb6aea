"""Pytest-based parser tests.

Test cases live in 03_parse/*.tests files. The expected section is one of:

    ok                  parsing succeeds
    error: <message>    parsing fails with an error containing <message>
    path = value        one assertion per line against the serialized tree,
                        e.g. members.0.members.length = 2
"""

import signal
from pathlib import Path

import pytest

from jsnet.ast import ClassDecl, Method, Namespace, has_declaration, to_dict
from jsnet.frontend.parse import ParseError, parse
from jsnet.frontend.tokens import TokenizeError

PARSE_TIMEOUT = 5


def _timeout_handler(signum, frame):
    raise TimeoutError("parse() timed out")


signal.signal(signal.SIGALRM, _timeout_handler)

PARSE_DIR = Path(__file__).parent / "03_parse"


def parse_test_file(path: Path) -> list[tuple[str, str, str]]:
    """Parse .tests file into (name, input, expected) tuples."""
    lines = path.read_text().split("\n")
    result: list[tuple[str, str, str]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            test_input = "\n".join(input_lines)
            expected = "\n".join(expected_lines).strip()
            result.append((test_name, test_input, expected))
        else:
            i += 1
    return result


def discover_parse_tests() -> list[tuple[str, str, str]]:
    """Find all parse tests, returns (test_id, input, expected)."""
    results = []
    for test_file in sorted(PARSE_DIR.glob("*.tests")):
        for name, input_code, expected in parse_test_file(test_file):
            results.append((f"{test_file.stem}/{name}", input_code, expected))
    return results


def resolve_dotpath(obj: object, path: str) -> object:
    """Resolve a dot-separated path against nested dicts and lists."""
    current = obj
    for part in path.split("."):
        if part == "length":
            return len(current)
        if isinstance(current, list):
            current = current[int(part)]
        elif isinstance(current, dict):
            current = current[part]
        else:
            raise KeyError(f"cannot traverse {type(current).__name__} with key {part!r}")
    return current


def _to_comparable(value: object) -> str:
    """Convert a value to its string form for comparison."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def pytest_generate_tests(metafunc):
    """Parametrize tests over parse test files."""
    if "parse_input" in metafunc.fixturenames:
        params = [
            pytest.param(input_code, expected, id=test_id)
            for test_id, input_code, expected in discover_parse_tests()
        ]
        metafunc.parametrize("parse_input,parse_expected", params)


def test_parse(parse_input: str, parse_expected: str):
    """Verify parser produces expected result."""
    try:
        signal.alarm(PARSE_TIMEOUT)
        unit = parse(parse_input)
        parse_error = None
    except (ParseError, TokenizeError) as e:
        unit = None
        parse_error = e
    finally:
        signal.alarm(0)

    if parse_expected.startswith("error:"):
        expected_msg = parse_expected[6:].strip()
        if parse_error is None:
            pytest.fail(f"Expected error containing '{expected_msg}', but parsing succeeded")
        if expected_msg.lower() not in str(parse_error).lower():
            pytest.fail(f"Expected error containing '{expected_msg}', got: {parse_error}")
        return

    if parse_error is not None:
        pytest.fail(f"Expected ok, got parse error: {parse_error}")
    if parse_expected == "ok":
        return

    result = to_dict(unit)
    for line in parse_expected.split("\n"):
        line = line.strip()
        if not line:
            continue
        if " = " not in line:
            pytest.fail(f"Bad assertion (no ' = '): {line}")
        path, expected_val = line.split(" = ", 1)
        path = path.strip()
        expected_val = expected_val.strip()
        try:
            actual = resolve_dotpath(result, path)
        except (KeyError, IndexError, TypeError) as e:
            pytest.fail(f"Path '{path}' not found in result: {e}")
        actual_str = _to_comparable(actual)
        if actual_str != expected_val:
            pytest.fail(
                f"Assertion failed: {path}\n"
                f"  expected: {expected_val!r}\n"
                f"  actual:   {actual_str!r}"
            )


def test_unit_nodes_are_typed():
    unit = parse("namespace N { class A { void F() { } } }")
    ns = unit.members[0]
    assert isinstance(ns, Namespace)
    cls = ns.members[0]
    assert isinstance(cls, ClassDecl)
    assert isinstance(cls.members[0], Method)
    assert not cls.members[0].is_static


def test_has_declaration_looks_through_namespaces():
    assert has_declaration(parse("namespace A { namespace B { enum E { X } } }").members)
    assert not has_declaration(parse("namespace A { struct S { } }").members)
    assert not has_declaration(parse("").members)


def test_frontend_package_exports():
    from jsnet import frontend
    from jsnet.middleend import ReplacerVisitor

    assert frontend.parse is parse
    assert issubclass(frontend.TokenizeError, Exception)
    with pytest.raises(frontend.ParseError):
        frontend.parse("class {")
    assert ReplacerVisitor({"a": "b"}) is not None
