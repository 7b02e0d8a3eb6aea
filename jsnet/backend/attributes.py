"""Marker attributes recognized on declarations and members."""

from __future__ import annotations

from jsnet.ast import Annotation

# Each marker lists the attribute names that select it.
EXCLUDE: tuple[str, ...] = ("Exclude",)
INLINE_OVERRIDE: tuple[str, ...] = ("JSFunction", "InlineOverride")
ENTRY_POINT: tuple[str, ...] = ("EntryPoint",)


def find_marker(annotations: list[Annotation], marker: tuple[str, ...]) -> Annotation | None:
    """Return the first annotation naming the marker, or None.

    Names compare trimmed and case-insensitively, and must match exactly:
    `ExcludeAttribute` or `Js.Exclude` do not select `Exclude`.
    """
    wanted = {name.lower() for name in marker}
    for ann in annotations:
        if ann.name.strip().lower() in wanted:
            return ann
    return None


def is_excluded(annotations: list[Annotation]) -> bool:
    return find_marker(annotations, EXCLUDE) is not None


def inline_payload(annotation: Annotation) -> str:
    """Raw text of the first argument, empty when there is none."""
    if len(annotation.args) == 0:
        return ""
    return annotation.args[0]


def unwrap_literal(text: str) -> str:
    """Strip a string literal's delimiters from an inline override payload.

    Drops leading @ and $ prefix characters, then one opening quote and one
    closing quote if present. Escapes inside are left alone.
    """
    i = 0
    while i < len(text) and text[i] in ("@", "$"):
        i += 1
    body = text[i:]
    if body.startswith('"'):
        body = body[1:]
    if body.endswith('"'):
        body = body[:-1]
    return body
