"""jsnet: translate C# class declarations to JavaScript."""

from jsnet.backend.assembler import CompilationError, assemble, compile_sources
from jsnet.frontend.parse import ParseError, parse
from jsnet.frontend.tokens import TokenizeError
from jsnet.middleend.rewrite import ClassRewriter, IdentityRewriter, ReplacerVisitor

__all__ = [
    "ClassRewriter",
    "CompilationError",
    "IdentityRewriter",
    "ParseError",
    "ReplacerVisitor",
    "TokenizeError",
    "assemble",
    "compile_sources",
    "parse",
]
