"""Indent unit: one indentation step rendered as a run of a space-like character."""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import total_ordering

from .characters import HORIZONTAL_TAB, SPACE, CharacterKind, SpecificCharacter
from .validation import ensure_non_negative


@total_ordering
@dataclass(frozen=True, slots=True)
class Indent:
    """A ``(character, width)`` pair describing one nesting level.

    ``width`` is clamped to zero instead of being rejected. Instances order
    by their rendered string, which is only meant to make sorting
    deterministic.
    """

    character: SpecificCharacter = SPACE
    width: int = 2

    def __post_init__(self) -> None:
        if isinstance(self.character, str):
            object.__setattr__(self, "character", SpecificCharacter.space(self.character))
        elif self.character.kind is not CharacterKind.SPACE:
            raise ValueError(f"{self.character.value!r} cannot be used as an indent")
        object.__setattr__(self, "width", max(int(self.width), 0))

    @classmethod
    def spaces(cls, count: int) -> "Indent":
        return cls(SPACE, count)

    @classmethod
    def tabs(cls, count: int) -> "Indent":
        return cls(HORIZONTAL_TAB, count)

    def with_width(self, width: int) -> "Indent":
        return replace(self, width=width)

    @property
    def description(self) -> str:
        return self.character.value * self.width

    def __str__(self) -> str:
        return self.description

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Indent):
            return NotImplemented
        return self.description < other.description

    def render(self, indent_level: int) -> str:
        """Prefix for a line nested ``indent_level`` steps deep."""

        ensure_non_negative(indent_level, name="indent_level")
        return self.character.value * (self.width * indent_level)

    def is_prefix_of(self, text: str) -> bool:
        return text.startswith(self.description)

    def strip(self, text: str) -> tuple[str, int]:
        """Remove whole indent prefixes from ``text``.

        Returns the remainder and how many prefixes were removed. Matching is
        literal, so a run of a different character or a partial run stops the
        count. A zero-width indent never matches.
        """

        if self.width == 0:
            return text, 0
        prefix = self.description
        count = 0
        while text.startswith(prefix):
            text = text[self.width:]
            count += 1
        return text, count

    def drop(self, text: str) -> str | None:
        remainder, count = self.strip(text)
        return remainder if count > 0 else None

    def level_of(self, text: str) -> int:
        return self.strip(text)[1]


DEFAULT_INDENT = Indent.spaces(2)

__all__ = ["Indent", "DEFAULT_INDENT"]
