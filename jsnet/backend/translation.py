"""Values returned by every translator and merged by its caller."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class EntryPoint:
    """Method marked [EntryPoint], invoked after all translated code."""

    owner: str
    method: str

    def invocation(self) -> str:
        return self.owner + "." + self.method + "();"


@dataclass
class Translation:
    """Emitted text plus the entry points found while producing it."""

    text: str = ""
    entry_points: list[EntryPoint] = field(default_factory=list)


def merge(parts: list[Translation]) -> Translation:
    """Concatenate texts and entry points, preserving order."""
    texts: list[str] = []
    entry_points: list[EntryPoint] = []
    for part in parts:
        texts.append(part.text)
        entry_points.extend(part.entry_points)
    return Translation("".join(texts), entry_points)
