"""C# declaration parser: recursive descent over the token list.

Only declarations are parsed structurally. Method and constructor bodies are
split into statements and kept as verbatim source slices; initializers,
default values and attribute arguments are kept the same way.
"""

from __future__ import annotations

from jsnet.ast import (
    Annotation,
    ClassDecl,
    CompilationUnit,
    Constructor,
    EnumDecl,
    EnumMember,
    Field,
    InterfaceDecl,
    Member,
    Method,
    Namespace,
    Node,
    OtherDecl,
    OtherMember,
    Param,
    Pos,
    Property,
)
from jsnet.frontend.tokens import (
    TK_CHAR,
    TK_EOF,
    TK_IDENT,
    TK_NUMBER,
    TK_OP,
    TK_STRING,
    Token,
    tokenize,
)

MODIFIERS: set[str] = {
    "abstract",
    "const",
    "extern",
    "fixed",
    "internal",
    "new",
    "override",
    "private",
    "protected",
    "public",
    "readonly",
    "ref",
    "sealed",
    "static",
    "unsafe",
    "virtual",
    "volatile",
}

# Only modifiers when another word follows: `partial class`, `async Task`.
CONTEXTUAL_MODIFIERS: set[str] = {"async", "file", "partial", "required"}

PARAM_MODIFIERS: set[str] = {"in", "out", "params", "readonly", "ref", "this"}

# May precede a local function declared inside a body.
LOCAL_FUNCTION_MODIFIERS: set[str] = {"async", "extern", "static", "unsafe"}

ASSIGN_OPS: set[str] = {
    "=",
    "=>",
    "+=",
    "-=",
    "*=",
    "/=",
    "%=",
    "&=",
    "|=",
    "^=",
    "<<=",
    "??=",
}

OPENERS: dict[str, str] = {"(": ")", "[": "]", "{": "}"}
CLOSERS: set[str] = {")", "]", "}"}

# Attribute targets that apply to the assembly rather than the next declaration.
GLOBAL_TARGETS: set[str] = {"assembly", "module"}

_LITERALS: tuple[str, ...] = (TK_STRING, TK_CHAR, TK_NUMBER)


class ParseError(Exception):
    """Parse error with location info."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class Parser:
    """Recursive descent parser for C# declarations."""

    def __init__(self, tokens: list[Token], source: str):
        self.tokens: list[Token] = tokens
        self.source: str = source
        self.pos: int = 0
        self.usings: list[str] = []

    # ── Helpers ──────────────────────────────────────────────

    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int) -> Token:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return self.tokens[len(self.tokens) - 1]
        return self.tokens[idx]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.type != TK_EOF:
            self.pos += 1
        return tok

    def at(self, value: str) -> bool:
        tok = self.current()
        return tok.value == value and tok.type not in _LITERALS

    def at_eof(self) -> bool:
        return self.current().type == TK_EOF

    def at_ident(self) -> bool:
        return self.current().type == TK_IDENT

    def at_word(self, offset: int = 0) -> bool:
        """Identifier or keyword at offset."""
        tok = self.peek(offset)
        return tok.type not in (TK_OP, TK_EOF) and tok.type not in _LITERALS

    def expect(self, value: str) -> Token:
        tok = self.current()
        if not self.at(value):
            raise self.error("expected '" + value + "', got " + _describe(tok))
        return self.advance()

    def expect_ident(self) -> Token:
        tok = self.current()
        if tok.type != TK_IDENT:
            raise self.error("expected identifier, got " + _describe(tok))
        return self.advance()

    def error(self, msg: str) -> ParseError:
        tok = self.current()
        return ParseError(msg, tok.line, tok.col)

    def _pos(self) -> Pos:
        tok = self.current()
        return Pos(tok.line, tok.col)

    def text(self, first: int, last: int) -> str:
        """Verbatim source from token first through token last, inclusive."""
        return self.source[self.tokens[first].start : self.tokens[last].end]

    # ── Top Level ────────────────────────────────────────────

    def parse_unit(self) -> CompilationUnit:
        members = self.parse_nodes(closing=False)
        return CompilationUnit(self.usings, members)

    def parse_nodes(self, closing: bool) -> list[Node]:
        """Parse namespace members until '}' (closing) or end of input."""
        members: list[Node] = []
        while True:
            if self.at_eof():
                if closing:
                    raise self.error("expected '}', got end of input")
                break
            if closing and self.at("}"):
                break
            if self.at(";"):
                self.advance()
                continue
            if self._at_using_directive():
                self.parse_using()
                continue
            if self.at("extern") and self.peek(1).value == "alias":
                self.skip_member()
                continue
            members.append(self.parse_node())
        return members

    def _at_using_directive(self) -> bool:
        if self.at("global") and self.peek(1).value == "using":
            return True
        return self.at("using") and self.peek(1).value != "("

    def parse_using(self) -> None:
        start = self.pos
        while not self.at(";"):
            if self.at_eof():
                raise self.error("expected ';', got end of input")
            self.advance()
        self.usings.append(self.text(start, self.pos))
        self.advance()

    def parse_node(self) -> Node:
        pos = self._pos()
        annotations = self.parse_attribute_lists()
        modifiers = self.parse_modifiers()
        if self.at("namespace"):
            return self.parse_namespace(pos)
        decl = self.parse_type_decl(pos, annotations, modifiers)
        if decl is not None:
            return decl
        # Top-level statement or local function: nothing to translate
        self.skip_statement()
        return OtherDecl(pos, "", "statement")

    def parse_namespace(self, pos: Pos) -> Namespace:
        self.expect("namespace")
        parts = [self.expect_ident().value]
        while self.at("."):
            self.advance()
            parts.append(self.expect_ident().value)
        name = ".".join(parts)
        if self.at(";"):
            self.advance()
            return Namespace(pos, name, self.parse_nodes(closing=False))
        self.expect("{")
        members = self.parse_nodes(closing=True)
        self.expect("}")
        return Namespace(pos, name, members)

    def parse_type_decl(
        self, pos: Pos, annotations: list[Annotation], modifiers: list[str]
    ) -> Node | None:
        """Parse class/interface/enum; skip struct/record/delegate. None if none of these."""
        if self.at("class"):
            return self.parse_class(pos, annotations, modifiers)
        if self.at("interface"):
            return self.parse_interface(pos, annotations, modifiers)
        if self.at("enum"):
            return self.parse_enum(pos, annotations, modifiers)
        if self.at("struct"):
            return self.skip_type_decl(pos, "struct")
        if self.at("record") and (self.at_ident_after(1) or self.peek(1).value in ("class", "struct")):
            return self.skip_type_decl(pos, "record")
        if self.at("delegate"):
            return self.skip_delegate(pos)
        return None

    def at_ident_after(self, offset: int) -> bool:
        return self.peek(offset).type == TK_IDENT

    # ── Annotations and modifiers ────────────────────────────

    def parse_attribute_lists(self) -> list[Annotation]:
        """Parse any number of [A, B(x)] lists. Assembly/module attributes are dropped."""
        result: list[Annotation] = []
        while self.at("["):
            self.advance()
            target = ""
            if self.at_word() and self.peek(1).value == ":":
                target = self.advance().value
                self.advance()
            attrs: list[Annotation] = []
            while True:
                pos = self._pos()
                start = self.pos
                self.skip_type()
                name = self.text(start, self.pos - 1)
                args: list[str] = []
                if self.at("("):
                    args = self.parse_attribute_args()
                attrs.append(Annotation(pos, name, args))
                if self.at(","):
                    self.advance()
                    if self.at("]"):
                        break
                    continue
                break
            self.expect("]")
            if target not in GLOBAL_TARGETS:
                result.extend(attrs)
        return result

    def parse_attribute_args(self) -> list[str]:
        self.expect("(")
        args: list[str] = []
        if self.at(")"):
            self.advance()
            return args
        while True:
            start = self.pos
            self.skip_expression({",", ")"})
            args.append(self.text(start, self.pos - 1).strip())
            if self.at(","):
                self.advance()
                continue
            self.expect(")")
            return args

    def parse_modifiers(self) -> list[str]:
        modifiers: list[str] = []
        while True:
            tok = self.current()
            if tok.type != TK_IDENT and tok.value in MODIFIERS and tok.type not in _LITERALS:
                modifiers.append(self.advance().value)
            elif tok.type == TK_IDENT and tok.value in CONTEXTUAL_MODIFIERS and self.at_word(1):
                modifiers.append(self.advance().value)
            else:
                return modifiers

    # ── Types ────────────────────────────────────────────────

    def skip_type(self) -> None:
        """Skip a type reference: qualified name, generics, tuple, array and nullable suffixes."""
        if self.at("("):
            self.skip_balanced()
        else:
            if not self.at_word():
                raise self.error("expected type, got " + _describe(self.current()))
            self.advance()
            while True:
                if self.at(".") or self.at("::"):
                    self.advance()
                    if not self.at_word():
                        raise self.error("expected name, got " + _describe(self.current()))
                    self.advance()
                elif self.at("<"):
                    self.skip_type_args()
                else:
                    break
        while True:
            if self.at("?") or self.at("*"):
                self.advance()
            elif self.at("[") and self.peek(1).value in ("]", ","):
                self.skip_balanced()
            else:
                return

    def skip_type_args(self) -> None:
        self.expect("<")
        depth = 1
        while depth > 0:
            if self.at_eof():
                raise self.error("expected '>', got end of input")
            if self.at("<"):
                depth += 1
            elif self.at(">"):
                depth -= 1
            self.advance()

    def skip_constraints(self) -> None:
        """Skip `where T : ...` clauses up to the body."""
        while self.at("where"):
            while not (self.at("{") or self.at(";") or self.at("=>")):
                if self.at_eof():
                    raise self.error("expected '{', got end of input")
                if self.at("("):
                    self.skip_balanced()
                else:
                    self.advance()

    def parse_base_list(self) -> list[str]:
        bases: list[str] = []
        if not self.at(":"):
            return bases
        self.advance()
        while True:
            start = self.pos
            self.skip_type()
            bases.append(self.text(start, self.pos - 1).strip())
            if self.at("("):
                self.skip_balanced()
            if self.at(","):
                self.advance()
                continue
            return bases

    # ── Type declarations ────────────────────────────────────

    def parse_class(
        self, pos: Pos, annotations: list[Annotation], modifiers: list[str]
    ) -> ClassDecl:
        self.expect("class")
        name, bases, members = self._parse_type_body()
        return ClassDecl(pos, name, annotations, modifiers, bases, members)

    def parse_interface(
        self, pos: Pos, annotations: list[Annotation], modifiers: list[str]
    ) -> InterfaceDecl:
        self.expect("interface")
        name, bases, members = self._parse_type_body()
        return InterfaceDecl(pos, name, annotations, modifiers, bases, members)

    def _parse_type_body(self) -> tuple[str, list[str], list[Member | Node]]:
        name = self.expect_ident().value
        if self.at("<"):
            self.skip_type_args()
        if self.at("("):
            self.skip_balanced()
        bases = self.parse_base_list()
        self.skip_constraints()
        self.expect("{")
        members: list[Member | Node] = []
        while not self.at("}"):
            if self.at_eof():
                raise self.error("expected '}', got end of input")
            if self.at(";"):
                self.advance()
                continue
            members.append(self.parse_member(name))
        self.expect("}")
        if self.at(";"):
            self.advance()
        return name, bases, members

    def parse_enum(
        self, pos: Pos, annotations: list[Annotation], modifiers: list[str]
    ) -> EnumDecl:
        self.expect("enum")
        name = self.expect_ident().value
        if self.at(":"):
            self.advance()
            self.skip_type()
        self.expect("{")
        members: list[EnumMember] = []
        while not self.at("}"):
            self.parse_attribute_lists()
            mpos = self._pos()
            start = self.pos
            mname = self.expect_ident().value
            value: str | None = None
            if self.at("="):
                self.advance()
                vstart = self.pos
                self.skip_expression({",", "}"})
                value = self.text(vstart, self.pos - 1)
            members.append(EnumMember(mpos, mname, value, self.text(start, self.pos - 1)))
            if not self.at(","):
                break
            self.advance()
        self.expect("}")
        if self.at(";"):
            self.advance()
        return EnumDecl(pos, name, annotations, modifiers, members)

    def skip_type_decl(self, pos: Pos, kind: str) -> OtherDecl:
        """Skip a struct or record declaration, keeping only its name."""
        self.advance()
        if self.at("class") or self.at("struct"):
            self.advance()
        name = self.expect_ident().value
        while not (self.at("{") or self.at(";")):
            if self.at_eof():
                raise self.error("expected '{', got end of input")
            if self.at("("):
                self.skip_balanced()
            else:
                self.advance()
        if self.at("{"):
            self.skip_balanced()
        if self.at(";"):
            self.advance()
        return OtherDecl(pos, name, kind)

    def skip_delegate(self, pos: Pos) -> OtherDecl:
        self.expect("delegate")
        self.skip_type()
        name = self.expect_ident().value
        self.skip_member()
        return OtherDecl(pos, name, "delegate")

    # ── Members ──────────────────────────────────────────────

    def parse_member(self, owner: str) -> Member | Node:
        pos = self._pos()
        annotations = self.parse_attribute_lists()
        modifiers = self.parse_modifiers()
        decl = self.parse_type_decl(pos, annotations, modifiers)
        if decl is not None:
            return decl
        if self.at("~"):
            self.skip_member()
            return OtherMember(pos, annotations, modifiers, "destructor")
        if self.at("event"):
            self.skip_member()
            return OtherMember(pos, annotations, modifiers, "event")
        if self.at("implicit") or self.at("explicit"):
            self.skip_member()
            return OtherMember(pos, annotations, modifiers, "conversion")
        if self.at_ident() and self.current().value == owner and self.peek(1).value == "(":
            return self.parse_constructor(pos, annotations, modifiers)
        type_start = self.pos
        self.skip_type()
        return_type = self.text(type_start, self.pos - 1)
        if self.at("operator"):
            self.skip_member()
            return OtherMember(pos, annotations, modifiers, "operator")
        if self.at("this"):
            self.skip_member()
            return OtherMember(pos, annotations, modifiers, "indexer")
        name, name_index = self.parse_member_name()
        if self.at("<") or self.at("("):
            return self.parse_method(pos, annotations, modifiers, name, return_type)
        if self.at("{") or self.at("=>"):
            return self.parse_property(pos, annotations, modifiers, name)
        if self.at("=") or self.at(";") or self.at(",") or self.at("["):
            return self.parse_field(pos, annotations, modifiers, name_index)
        raise self.error("unexpected " + _describe(self.current()) + " in member declaration")

    def parse_member_name(self) -> tuple[str, int]:
        """Parse a member name, possibly an explicit interface name like IFoo<T>.Bar."""
        tok = self.expect_ident()
        index = self.pos - 1
        while True:
            if self.at("<"):
                saved = self.pos
                self.skip_type_args()
                if not self.at("."):
                    self.pos = saved
                    break
            if not self.at("."):
                break
            self.advance()
            if self.at("this"):
                break
            tok = self.expect_ident()
            index = self.pos - 1
        return tok.value, index

    def parse_params(self) -> list[Param]:
        self.expect("(")
        params: list[Param] = []
        if self.at(")"):
            self.advance()
            return params
        while True:
            self.parse_attribute_lists()
            pos = self._pos()
            while (
                self.current().type != TK_IDENT and self.current().value in PARAM_MODIFIERS
            ) or (self.at("scoped") and self.at_word(1)):
                self.advance()
            self.skip_type()
            name = self.expect_ident().value
            default: str | None = None
            if self.at("="):
                self.advance()
                start = self.pos
                self.skip_expression({",", ")"})
                default = self.text(start, self.pos - 1)
            params.append(Param(pos, name, default))
            if self.at(","):
                self.advance()
                continue
            self.expect(")")
            return params

    def parse_body(self, returns_value: bool) -> list[str] | None:
        """Block body, expression body (one synthesized statement), or None for ';'."""
        if self.at("{"):
            return self.parse_block()
        if self.at("=>"):
            self.advance()
            start = self.pos
            self.skip_expression({";"})
            expr = self.text(start, self.pos - 1)
            self.expect(";")
            if returns_value:
                return ["return " + expr + ";"]
            return [expr + ";"]
        self.expect(";")
        return None

    def parse_method(
        self,
        pos: Pos,
        annotations: list[Annotation],
        modifiers: list[str],
        name: str,
        return_type: str,
    ) -> Method:
        if self.at("<"):
            self.skip_type_args()
        params = self.parse_params()
        self.skip_constraints()
        body = self.parse_body(return_type != "void")
        return Method(pos, annotations, modifiers, name, params, body)

    def parse_constructor(
        self, pos: Pos, annotations: list[Annotation], modifiers: list[str]
    ) -> Constructor:
        name = self.expect_ident().value
        params = self.parse_params()
        # `: base(...)` / `: this(...)` initializers are dropped
        if self.at(":"):
            self.advance()
            self.advance()
            if self.at("("):
                self.skip_balanced()
        body = self.parse_body(False)
        return Constructor(pos, annotations, modifiers, name, params, body)

    def parse_property(
        self, pos: Pos, annotations: list[Annotation], modifiers: list[str], name: str
    ) -> Property:
        if self.at("=>"):
            self.advance()
            self.skip_expression({";"})
            self.expect(";")
            return Property(pos, annotations, modifiers, name, True, False)
        has_getter = False
        has_setter = False
        self.expect("{")
        while not self.at("}"):
            self.parse_attribute_lists()
            self.parse_modifiers()
            tok = self.expect_ident()
            if tok.value == "get":
                has_getter = True
            elif tok.value == "set":
                has_setter = True
            elif tok.value not in ("init", "add", "remove"):
                raise ParseError("expected accessor, got '" + tok.value + "'", tok.line, tok.col)
            if self.at("{"):
                self.skip_balanced()
            elif self.at("=>"):
                self.advance()
                self.skip_expression({";"})
                self.expect(";")
            else:
                self.expect(";")
        self.expect("}")
        if self.at("="):
            self.advance()
            self.skip_expression({";"})
            self.expect(";")
        return Property(pos, annotations, modifiers, name, has_getter, has_setter)

    def parse_field(
        self, pos: Pos, annotations: list[Annotation], modifiers: list[str], name_index: int
    ) -> Field:
        variables: list[str] = []
        start = name_index
        while True:
            if self.at("["):
                self.skip_balanced()
            if self.at("="):
                self.advance()
                self.skip_initializer()
            variables.append(self.text(start, self.pos - 1))
            if self.at(","):
                self.advance()
                start = self.pos
                self.expect_ident()
                continue
            self.expect(";")
            return Field(pos, annotations, modifiers, variables)

    # ── Skipping ─────────────────────────────────────────────

    def skip_balanced(self) -> None:
        """Skip from an opening bracket through its matching closer."""
        tok = self.current()
        if tok.type != TK_OP or tok.value not in OPENERS:
            raise self.error("expected bracket, got " + _describe(tok))
        stack: list[str] = []
        while True:
            tok = self.current()
            if tok.type == TK_EOF:
                raise self.error("expected '" + stack[-1] + "', got end of input")
            if tok.type == TK_OP:
                if tok.value in OPENERS:
                    stack.append(OPENERS[tok.value])
                elif tok.value in CLOSERS:
                    if tok.value != stack[-1]:
                        raise self.error("expected '" + stack[-1] + "', got '" + tok.value + "'")
                    stack.pop()
                    if not stack:
                        self.advance()
                        return
            self.advance()

    def skip_expression(self, stops: set[str]) -> None:
        """Skip an expression up to (not including) a stop token at bracket depth 0."""
        start = self.pos
        while True:
            tok = self.current()
            if tok.type == TK_EOF:
                raise self.error("unexpected end of input")
            if tok.type == TK_OP:
                if tok.value in stops:
                    break
                if tok.value in OPENERS:
                    self.skip_balanced()
                    continue
                if tok.value in CLOSERS:
                    raise self.error("unexpected '" + tok.value + "'")
            self.advance()
        if self.pos == start:
            raise self.error("expected expression, got " + _describe(self.current()))

    def skip_initializer(self) -> None:
        """Skip a field initializer. A ',' ends it only when another declarator follows."""
        start = self.pos
        while True:
            tok = self.current()
            if tok.type == TK_EOF:
                raise self.error("unexpected end of input")
            if tok.type == TK_OP:
                if tok.value == ";":
                    break
                if tok.value == "," and self._starts_declarator(1):
                    break
                if tok.value in OPENERS:
                    self.skip_balanced()
                    continue
                if tok.value in CLOSERS:
                    raise self.error("unexpected '" + tok.value + "'")
            self.advance()
        if self.pos == start:
            raise self.error("expected expression, got " + _describe(self.current()))

    def _starts_declarator(self, offset: int) -> bool:
        return self.peek(offset).type == TK_IDENT and self.peek(offset + 1).value in (
            "=",
            ",",
            ";",
            "[",
        )

    def skip_member(self) -> None:
        """Skip an untranslated member through its ';' or closing '}'."""
        seen_assign = False
        while True:
            tok = self.current()
            if tok.type == TK_EOF:
                raise self.error("unexpected end of input")
            if tok.type == TK_OP:
                if tok.value == ";":
                    self.advance()
                    return
                if tok.value == "{":
                    self.skip_balanced()
                    if not seen_assign:
                        if self.at(";"):
                            self.advance()
                        return
                    continue
                if tok.value in OPENERS:
                    self.skip_balanced()
                    continue
                if tok.value in CLOSERS:
                    raise self.error("unexpected '" + tok.value + "'")
                if tok.value in ASSIGN_OPS:
                    seen_assign = True
            self.advance()

    # ── Statements ───────────────────────────────────────────

    def parse_block(self) -> list[str]:
        """Parse { ... } into the verbatim text of each statement."""
        self.expect("{")
        stmts: list[str] = []
        while not self.at("}"):
            if self.at_eof():
                raise self.error("expected '}', got end of input")
            start = self.pos
            self.skip_statement()
            stmts.append(self.text(start, self.pos - 1))
        self.expect("}")
        return stmts

    def skip_statement(self) -> None:
        tok = self.current()
        if self.at("{"):
            self.skip_balanced()
            return
        if self.at(";"):
            self.advance()
            return
        if tok.type == TK_IDENT and self.peek(1).value == ":" and self.peek(1).type == TK_OP:
            # labeled statement
            self.advance()
            self.advance()
            self.skip_statement()
            return
        if self.at("await") and self.peek(1).value in ("foreach", "using"):
            self.advance()
        if self.at("if"):
            self.advance()
            self.skip_balanced()
            self.skip_statement()
            if self.at("else"):
                self.advance()
                self.skip_statement()
            return
        if (
            self.at("while")
            or self.at("for")
            or self.at("foreach")
            or self.at("lock")
            or self.at("fixed")
            or (self.at("using") and self.peek(1).value == "(")
        ):
            self.advance()
            self.skip_balanced()
            self.skip_statement()
            return
        if self.at("do"):
            self.advance()
            self.skip_statement()
            self.expect("while")
            self.skip_balanced()
            self.expect(";")
            return
        if self.at("try"):
            self.advance()
            self.skip_balanced()
            while self.at("catch"):
                self.advance()
                if self.at("("):
                    self.skip_balanced()
                if self.at("when"):
                    self.advance()
                    self.skip_balanced()
                self.skip_balanced()
            if self.at("finally"):
                self.advance()
                self.skip_balanced()
            return
        if self.at("switch") and self.peek(1).value == "(":
            self.advance()
            self.skip_balanced()
            self.skip_balanced()
            return
        if (self.at("checked") or self.at("unchecked") or self.at("unsafe")) and self.peek(
            1
        ).value == "{":
            self.advance()
            self.skip_balanced()
            return
        self.skip_simple_statement()

    def skip_simple_statement(self) -> None:
        """Skip through ';' at depth 0, or through the body of a local function."""
        lead = 0
        while (
            self.peek(lead).value in LOCAL_FUNCTION_MODIFIERS
            and self.peek(lead).type not in _LITERALS
        ):
            lead += 1
        first = self.peek(lead)
        can_be_function = first.type == TK_IDENT and first.value not in ("yield", "await")
        seen_assign = False
        seen_where = False
        prev: Token | None = None
        while True:
            tok = self.current()
            if tok.type == TK_EOF:
                raise self.error("unexpected end of input")
            if tok.type == TK_OP:
                if tok.value == ";":
                    self.advance()
                    return
                if tok.value in ASSIGN_OPS:
                    seen_assign = True
                if tok.value == "{":
                    local_function = (
                        can_be_function
                        and not seen_assign
                        and prev is not None
                        and (prev.value == ")" or seen_where)
                    )
                    self.skip_balanced()
                    if local_function:
                        return
                    prev = self.tokens[self.pos - 1]
                    continue
                if tok.value in OPENERS:
                    self.skip_balanced()
                    prev = self.tokens[self.pos - 1]
                    continue
                if tok.value in CLOSERS:
                    raise self.error("unexpected '" + tok.value + "'")
            elif tok.type == TK_IDENT and tok.value == "where":
                seen_where = True
            prev = self.advance()


def _describe(tok: Token) -> str:
    if tok.type == TK_EOF:
        return "end of input"
    return "'" + tok.value + "'"


def parse(source: str) -> CompilationUnit:
    """Parse C# source into a CompilationUnit."""
    tokens = tokenize(source)
    parser = Parser(tokens, source)
    return parser.parse_unit()
