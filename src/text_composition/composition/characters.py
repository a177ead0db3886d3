"""Validated single-character tokens: space-like characters and newlines."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Characters treated as line boundaries. CR+LF is a single boundary.
NEWLINE_CHARACTERS = frozenset("\n\x0b\x0c\r\x85\u2028\u2029")
CRLF = "\r\n"

# File, group, record and unit separators. str.isspace() accepts them but they
# are control characters, not indentation.
INFORMATION_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def is_newline(character: str) -> bool:
    return character in NEWLINE_CHARACTERS or character == CRLF


def is_space_like(character: str) -> bool:
    """Whitespace that does not break a line (space, tab, NBSP, ...)."""

    return (
        len(character) == 1
        and character.isspace()
        and character not in INFORMATION_SEPARATORS
        and not is_newline(character)
    )


class CharacterKind(str, Enum):
    SPACE = "space"
    NEWLINE = "newline"

    def expects(self, character: str) -> bool:
        if self is CharacterKind.SPACE:
            return is_space_like(character)
        return is_newline(character)


@dataclass(frozen=True, slots=True, order=True)
class SpecificCharacter:
    """A single character restricted to one ``CharacterKind``.

    Ordering and equality only look at ``value``; the kind is implied by it.
    """

    value: str
    kind: CharacterKind = field(compare=False)

    def __post_init__(self) -> None:
        kind = CharacterKind(self.kind)
        object.__setattr__(self, "kind", kind)
        if not kind.expects(self.value):
            raise ValueError(f"{self.value!r} is not a valid {kind.value} character")

    @classmethod
    def space(cls, value: str) -> "SpecificCharacter":
        return cls(value, CharacterKind.SPACE)

    @classmethod
    def newline(cls, value: str) -> "SpecificCharacter":
        return cls(value, CharacterKind.NEWLINE)

    @classmethod
    def parse(cls, value: str, kind: CharacterKind | str) -> "SpecificCharacter | None":
        """Like the constructor, but ``None`` for a character of the wrong kind."""

        if not CharacterKind(kind).expects(value):
            return None
        return cls(value, CharacterKind(kind))

    def __str__(self) -> str:
        return self.value


SPACE = SpecificCharacter.space(" ")
HORIZONTAL_TAB = SpecificCharacter.space("\t")

LINE_FEED = SpecificCharacter.newline("\n")
CARRIAGE_RETURN = SpecificCharacter.newline("\r")
CARRIAGE_RETURN_AND_LINE_FEED = SpecificCharacter.newline(CRLF)

__all__ = [
    "CharacterKind",
    "SpecificCharacter",
    "NEWLINE_CHARACTERS",
    "is_newline",
    "is_space_like",
    "SPACE",
    "HORIZONTAL_TAB",
    "LINE_FEED",
    "CARRIAGE_RETURN",
    "CARRIAGE_RETURN_AND_LINE_FEED",
]
