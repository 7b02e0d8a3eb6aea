"""Class rewrite passes applied before a class is translated.

A pass takes a ClassDecl and returns a ClassDecl. The input tree is never
mutated; passes that change something build new nodes.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Protocol

from jsnet.ast import ClassDecl, Constructor, Member, Method, Node


class ClassRewriter(Protocol):
    def rewrite(self, cls: ClassDecl) -> ClassDecl: ...


class IdentityRewriter:
    """Leaves classes unchanged."""

    def rewrite(self, cls: ClassDecl) -> ClassDecl:
        return cls


class ReplacerVisitor:
    """Replace whole identifiers in method and constructor statements.

    replacements maps old identifier to new identifier. Only statement text
    of this class's own methods and constructors changes; nested type
    declarations are rewritten when they are translated themselves.
    """

    def __init__(self, replacements: dict[str, str]) -> None:
        self.replacements: dict[str, str] = dict(replacements)
        self.pattern: re.Pattern[str] | None = None
        if len(self.replacements) > 0:
            # Longest first so `FooBar` wins over `Foo` at the same position
            names = sorted(self.replacements, key=len, reverse=True)
            self.pattern = re.compile(r"\b(" + "|".join(re.escape(n) for n in names) + r")\b")

    def replace_text(self, text: str) -> str:
        if self.pattern is None:
            return text
        return self.pattern.sub(lambda m: self.replacements[m.group(1)], text)

    def rewrite(self, cls: ClassDecl) -> ClassDecl:
        members: list[Member | Node] = []
        for member in cls.members:
            if isinstance(member, (Method, Constructor)) and member.body is not None:
                body = [self.replace_text(stmt) for stmt in member.body]
                member = dataclasses.replace(member, body=body)
            members.append(member)
        return dataclasses.replace(cls, members=members)
