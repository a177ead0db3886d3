"""Estimated terminal width of text using the East_Asian_Width property."""

from __future__ import annotations

import unicodedata

_WIDE = frozenset({"W", "F"})
_ZERO_WIDTH_CATEGORIES = frozenset({"Mn", "Me", "Cf"})


def character_width(character: str) -> int:
    """Columns occupied by one code point: 0, 1 or 2."""

    if unicodedata.category(character) in _ZERO_WIDTH_CATEGORIES:
        return 0
    if unicodedata.east_asian_width(character) in _WIDE:
        return 2
    return 1


def estimated_width(text: str) -> int:
    return sum(character_width(character) for character in text)


__all__ = ["character_width", "estimated_width"]
