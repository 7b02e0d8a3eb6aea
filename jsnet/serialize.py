"""JSON rendering of the declaration tree for --stop-at parse."""

from __future__ import annotations


def _json_escape(s: str) -> str:
    """Escape a string for JSON output."""
    result: list[str] = []
    for c in s:
        if c == "\\":
            result.append("\\\\")
        elif c == '"':
            result.append('\\"')
        elif c == "\n":
            result.append("\\n")
        elif c == "\r":
            result.append("\\r")
        elif c == "\t":
            result.append("\\t")
        elif ord(c) < 0x20:
            result.append("\\u" + format(ord(c), "04x"))
        else:
            result.append(c)
    return "".join(result)


def _to_json(obj: object, indent: int, level: int) -> str:
    if obj is None:
        return "null"
    if isinstance(obj, bool):
        return "true" if obj else "false"
    if isinstance(obj, int):
        return str(obj)
    if isinstance(obj, str):
        return '"' + _json_escape(obj) + '"'
    pad = " " * (indent * (level + 1))
    pad_close = " " * (indent * level)
    if isinstance(obj, list):
        if len(obj) == 0:
            return "[]"
        items = [pad + _to_json(item, indent, level + 1) for item in obj]
        return "[\n" + ",\n".join(items) + "\n" + pad_close + "]"
    if isinstance(obj, dict):
        if len(obj) == 0:
            return "{}"
        entries: list[str] = []
        for key, value in obj.items():
            entries.append(
                pad + '"' + _json_escape(str(key)) + '": ' + _to_json(value, indent, level + 1)
            )
        return "{\n" + ",\n".join(entries) + "\n" + pad_close + "}"
    raise TypeError("cannot serialize " + type(obj).__name__)


def to_json(obj: object) -> str:
    """Serialize dicts, lists, strings, ints, bools and None to pretty-printed JSON."""
    return _to_json(obj, 2, 0)
