"""Equality operator rewriting for statement text."""

from __future__ import annotations


def strict_equality(text: str) -> str:
    """Turn == into === and != into !==.

    Plain text substitution: operators inside string literals and comments
    are rewritten too, and an existing === becomes ====.
    """
    return text.replace("==", "===").replace("!=", "!==")
