"""Recursive dispatch over the declaration tree."""

from __future__ import annotations

from jsnet.ast import ClassDecl, CompilationUnit, EnumDecl, InterfaceDecl, Namespace, Node, OtherDecl
from jsnet.backend.declarations import DeclarationTranslator
from jsnet.backend.translation import Translation, merge
from jsnet.middleend.rewrite import ClassRewriter, IdentityRewriter


class TreeWalker:
    """Walk namespaces depth-first and translate every declaration in order."""

    def __init__(self, rewriter: ClassRewriter | None = None) -> None:
        if rewriter is None:
            rewriter = IdentityRewriter()
        self.declarations = DeclarationTranslator(rewriter, self.visit)

    def walk(self, unit: CompilationUnit) -> Translation:
        return merge([self.visit(node) for node in unit.members])

    def visit(self, node: Node) -> Translation:
        match node:
            case Namespace():
                return merge([self.visit(child) for child in node.members])
            case ClassDecl():
                return self.declarations.translate_class(node)
            case InterfaceDecl():
                return self.declarations.translate_interface(node)
            case EnumDecl():
                return self.declarations.translate_enum(node)
            case OtherDecl():
                return Translation()
            case _:
                return Translation()
