"""Declaration translation: classes, interfaces and enums to JavaScript."""

from __future__ import annotations

import re
from typing import Callable

from jsnet.ast import ClassDecl, EnumDecl, InterfaceDecl, Member, Node
from jsnet.backend.attributes import is_excluded
from jsnet.backend.members import emit_interface_member, emit_member
from jsnet.backend.translation import Translation, merge
from jsnet.middleend.rewrite import ClassRewriter

# Interface naming convention: IComparable, IList<T>
_INTERFACE_NAME = re.compile(r"I[A-Z]")


def extends_target(bases: list[str]) -> str | None:
    """Base class for `extends`: the first listed base, unless it names an interface."""
    if len(bases) == 0:
        return None
    base = bases[0].strip()
    if base == "" or _INTERFACE_NAME.match(base):
        return None
    return base


def _begin(kind: str, name: str) -> str:
    return "// BEGIN C# " + kind + ": " + name + "\n"


def _end(kind: str, name: str) -> str:
    return "// END C# " + kind + ": " + name + "\n"


class DeclarationTranslator:
    """Translate one declaration. Nested declarations go back through visit."""

    def __init__(self, rewriter: ClassRewriter, visit: Callable[[Node], Translation]) -> None:
        self.rewriter = rewriter
        self.visit = visit

    def translate_class(self, cls: ClassDecl) -> Translation:
        if is_excluded(cls.annotations):
            return Translation()
        cls = self.rewriter.rewrite(cls)
        header = "class " + cls.name
        base = extends_target(cls.bases)
        if base is not None:
            header += " extends " + base
        parts: list[Translation] = [Translation(_begin("Class", cls.name) + header + " {\n")]
        for member in cls.members:
            if isinstance(member, Member):
                parts.append(emit_member(member, cls.name))
            else:
                parts.append(self.visit(member))
        parts.append(Translation("}\n" + _end("Class", cls.name)))
        return merge(parts)

    def translate_interface(self, iface: InterfaceDecl) -> Translation:
        if is_excluded(iface.annotations):
            return Translation()
        parts: list[Translation] = [
            Translation(_begin("Interface", iface.name) + "class " + iface.name + " {\n")
        ]
        for member in iface.members:
            if isinstance(member, Member):
                parts.append(emit_interface_member(member))
        parts.append(Translation("}\n" + _end("Interface", iface.name)))
        return merge(parts)

    def translate_enum(self, enum: EnumDecl) -> Translation:
        if is_excluded(enum.annotations):
            return Translation()
        members = ", ".join(m.text for m in enum.members)
        text = (
            _begin("Enum", enum.name)
            + "const "
            + enum.name
            + " = Object.freeze({"
            + members
            + "});\n"
            + _end("Enum", enum.name)
        )
        return Translation(text)
