"""Final output: prelude, translated units, entry-point calls, trailer."""

from __future__ import annotations

from jsnet.ast import CompilationUnit, has_declaration
from jsnet.backend.translation import EntryPoint
from jsnet.backend.walker import TreeWalker
from jsnet.frontend.parse import ParseError, parse
from jsnet.frontend.tokens import TokenizeError
from jsnet.middleend.rewrite import ClassRewriter

TOOL_NAME: str = "JavaScript.NET"

# Runtime helpers the translated code may call.
PRELUDE: str = """
Array.prototype.remove = function() {
    var what, a = arguments, L = a.length, ax;
    while (L && this.length) {
        what = a[--L];
        while ((ax = this.indexOf(what)) !== -1) {
            this.splice(ax, 1);
        }
    }
    return this;
};"""


class CompilationError(Exception):
    """A source unit could not be compiled. unit is its 0-based index."""

    def __init__(self, msg: str, unit: int | None = None):
        self.msg: str = msg
        self.unit: int | None = unit
        if unit is not None:
            super().__init__("unit " + str(unit) + ": " + msg)
        else:
            super().__init__(msg)


def assemble(units: list[CompilationUnit], rewriter: ClassRewriter | None = None) -> str:
    """Translate parsed units into one JavaScript program."""
    for i, unit in enumerate(units):
        if not has_declaration(unit.members):
            raise CompilationError("No declaration found!", i)
    walker = TreeWalker(rewriter)
    out: list[str] = ["// BEGIN EXTRAS" + PRELUDE + "\n// END EXTRAS \n\n"]
    entry_points: list[EntryPoint] = []
    for unit in units:
        translation = walker.walk(unit)
        out.append(translation.text + "\n\n")
        entry_points.extend(translation.entry_points)
    for entry in entry_points:
        out.append(entry.invocation() + "\n")
    out.append("\n/* COMPILED WITH " + TOOL_NAME + " */")
    return "".join(out)


def compile_sources(sources: list[str], rewriter: ClassRewriter | None = None) -> str:
    """Parse and translate C# sources in order. Any failure raises CompilationError."""
    units: list[CompilationUnit] = []
    for i, source in enumerate(sources):
        try:
            units.append(parse(source))
        except (TokenizeError, ParseError) as e:
            raise CompilationError(
                str(e.line) + ":" + str(e.col) + ": " + e.msg, i
            ) from e
    return assemble(units, rewriter)
