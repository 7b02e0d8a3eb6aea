"""Class rewrite passes run between parsing and translation."""

from .rewrite import ClassRewriter, IdentityRewriter, ReplacerVisitor
