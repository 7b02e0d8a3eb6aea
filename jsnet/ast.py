"""Declaration tree produced by the frontend and consumed by the backend.

The tree is read-only input for translation. Passes that need a different
shape (see middleend) build new nodes instead of mutating these.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields


# ============================================================
# POSITION
# ============================================================


@dataclass
class Pos:
    """Source position, 1-indexed."""

    line: int
    col: int


# ============================================================
# ANNOTATIONS AND PARAMETERS
# ============================================================


@dataclass
class Annotation:
    """[Name(arg, arg)]. args are raw source text, trimmed."""

    pos: Pos
    name: str
    args: list[str] = field(default_factory=list)


@dataclass
class Param:
    """Method or constructor parameter. default is verbatim source text."""

    pos: Pos
    name: str
    default: str | None = None


# ============================================================
# MEMBERS
# ============================================================


@dataclass
class Member:
    """Base for all class and interface members."""

    pos: Pos
    annotations: list[Annotation]
    modifiers: list[str]

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers


@dataclass
class Method(Member):
    """Method. body is None for abstract, extern and interface methods.

    Each body item is the verbatim text of one statement.
    """

    name: str
    params: list[Param]
    body: list[str] | None


@dataclass
class Constructor(Member):
    """Constructor. name repeats the owning type's identifier."""

    name: str
    params: list[Param]
    body: list[str] | None


@dataclass
class Field(Member):
    """Field statement. variables holds each declarator's text: name [= init]."""

    variables: list[str]


@dataclass
class Property(Member):
    """Property with the accessors that were declared, bodies discarded."""

    name: str
    has_getter: bool
    has_setter: bool


@dataclass
class OtherMember(Member):
    """Member kind with no translation rule: event, indexer, operator, destructor."""

    kind: str


# ============================================================
# DECLARATIONS
# ============================================================


@dataclass
class Decl:
    """Base for all declarations."""

    pos: Pos
    name: str


@dataclass
class Namespace(Decl):
    """namespace Name { children }, also file-scoped namespaces."""

    members: list[Node]


@dataclass
class ClassDecl(Decl):
    """class Name : Base, IFace { members }."""

    annotations: list[Annotation]
    modifiers: list[str]
    bases: list[str]
    members: list[Member | Node]


@dataclass
class InterfaceDecl(Decl):
    """interface Name : IBase { members }."""

    annotations: list[Annotation]
    modifiers: list[str]
    bases: list[str]
    members: list[Member | Node]


@dataclass
class EnumMember:
    """Enum member. text is the verbatim source form, e.g. 'Green = 2'."""

    pos: Pos
    name: str
    value: str | None
    text: str


@dataclass
class EnumDecl(Decl):
    """enum Name : underlying { members }."""

    annotations: list[Annotation]
    modifiers: list[str]
    members: list[EnumMember]


@dataclass
class OtherDecl(Decl):
    """Declaration kind with no translation rule: struct, record, delegate, statement."""

    kind: str


Node = Namespace | ClassDecl | InterfaceDecl | EnumDecl | OtherDecl


@dataclass
class CompilationUnit:
    """One parsed source text."""

    usings: list[str]
    members: list[Node]


# ============================================================
# QUERIES
# ============================================================


def has_declaration(nodes: list[Node]) -> bool:
    """True if any class, interface or enum appears in nodes or nested namespaces."""
    for node in nodes:
        if isinstance(node, (ClassDecl, InterfaceDecl, EnumDecl)):
            return True
        if isinstance(node, Namespace) and has_declaration(node.members):
            return True
    return False


def to_dict(node: object) -> object:
    """Convert a tree node to JSON-compatible data, tagging objects with _type."""
    if isinstance(node, list):
        return [to_dict(item) for item in node]
    if isinstance(node, Pos):
        return [node.line, node.col]
    if hasattr(node, "__dataclass_fields__"):
        result: dict[str, object] = {"_type": type(node).__name__}
        for f in fields(node):
            result[f.name] = to_dict(getattr(node, f.name))
        return result
    return node
