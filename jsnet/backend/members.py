"""Member translation: methods, constructors, fields, properties, interface stubs."""

from __future__ import annotations

from jsnet.ast import Constructor, Field, Member, Method, OtherMember, Param, Property
from jsnet.backend.attributes import (
    ENTRY_POINT,
    INLINE_OVERRIDE,
    find_marker,
    inline_payload,
    is_excluded,
    unwrap_literal,
)
from jsnet.backend.equality import strict_equality
from jsnet.backend.translation import EntryPoint, Translation


def emit_params(params: list[Param]) -> str:
    parts: list[str] = []
    for p in params:
        if p.default is not None:
            parts.append(p.name + " = " + p.default)
        else:
            parts.append(p.name)
    return ", ".join(parts)


def emit_body(body: list[str] | None) -> str:
    """One line per statement with strict equality, empty for a missing body."""
    if body is None:
        return ""
    return "".join(strict_equality(stmt + "\n") for stmt in body)


def emit_method(method: Method, owner: str) -> Translation:
    prefix = ""
    if method.is_static:
        prefix = "static "
    override = find_marker(method.annotations, INLINE_OVERRIDE)
    if override is not None:
        body = unwrap_literal(inline_payload(override)) + "\n"
    else:
        body = emit_body(method.body)
    text = prefix + method.name + "(" + emit_params(method.params) + ") {\n" + body + "}\n"
    entry_points: list[EntryPoint] = []
    if find_marker(method.annotations, ENTRY_POINT) is not None:
        entry_points.append(EntryPoint(owner, method.name))
    return Translation(text, entry_points)


def emit_constructor(ctor: Constructor) -> str:
    return "constructor(" + emit_params(ctor.params) + ") {\n" + emit_body(ctor.body) + "}\n"


def emit_field(fld: Field) -> str:
    # Only the first declarator survives: `int a = 1, b;` -> `static a = 1;`
    if len(fld.variables) == 0:
        return ""
    return "static " + fld.variables[0] + ";\n"


def emit_property(prop: Property) -> str:
    text = ""
    if prop.has_getter:
        text += "get " + prop.name + "() {\nreturn this." + prop.name + ";\n}\n"
    if prop.has_setter:
        text += "set " + prop.name + "(val) {\nthis." + prop.name + " = val;\n}\n"
    return text


def emit_interface_method(method: Method) -> str:
    if method.is_static:
        return ""
    return (
        method.name
        + "("
        + emit_params(method.params)
        + ") {\n"
        + 'throw new Error("Method \''
        + method.name
        + "' must be implemented\");\n"
        + "}\n"
    )


def emit_member(member: Member, owner: str) -> Translation:
    """Translate one class member. Excluded members contribute nothing."""
    if is_excluded(member.annotations):
        return Translation()
    match member:
        case Method():
            return emit_method(member, owner)
        case Constructor():
            return Translation(emit_constructor(member))
        case Field():
            return Translation(emit_field(member))
        case Property():
            return Translation(emit_property(member))
        case OtherMember():
            return Translation()
        case _:
            raise NotImplementedError("Unknown member")


def emit_interface_member(member: Member) -> Translation:
    """Translate one interface member: method stubs and properties only."""
    if is_excluded(member.annotations):
        return Translation()
    match member:
        case Method():
            return Translation(emit_interface_method(member))
        case Property():
            return Translation(emit_property(member))
        case _:
            return Translation()
