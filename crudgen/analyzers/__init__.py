"""Source analysis: class extraction and base-class matching."""

from __future__ import annotations

from .declarations import DeclarationExtractor, ParseError
from .inheritance import any_matches, match_declaration, matches

__all__ = [
    "DeclarationExtractor",
    "ParseError",
    "any_matches",
    "match_declaration",
    "matches",
]
