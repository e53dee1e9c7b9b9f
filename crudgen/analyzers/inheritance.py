"""Lexical base-class matching on the last segment of a type name."""

from __future__ import annotations

from ..models import MatchResult, TypeDeclaration


def simple_name(expr: str) -> str:
    """Return the last non-empty dot segment of ``expr`` (``""`` if none)."""
    for segment in reversed(expr.split(".")):
        if segment:
            return segment
    return ""


def matches(expr: str, target_base_name: str) -> bool:
    """True when ``expr`` names ``target_base_name``, ignoring its namespace.

    Only ``expr`` is split; a dotted target is compared as a whole, so
    ``matches("A.B", "A.B")`` is False. No symbol resolution happens here: an
    interface or an unrelated type with the same simple name also matches.
    """
    segment = simple_name(expr)
    return bool(segment) and segment == target_base_name


def any_matches(declaration: TypeDeclaration, target_base_name: str) -> bool:
    return any(matches(expr, target_base_name) for expr in declaration.base_type_expressions)


def match_declaration(declaration: TypeDeclaration, target_base_name: str) -> MatchResult:
    return MatchResult(
        declaration_name=declaration.name,
        matched=any_matches(declaration, target_base_name),
    )


__all__ = ["any_matches", "match_declaration", "matches", "simple_name"]
