"""Single logical line: an indent level plus a newline-free payload."""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import total_ordering

from .characters import is_newline
from .indent import DEFAULT_INDENT, Indent
from .validation import LineValidationError, ensure_single_line, is_single_line
from .width import estimated_width


def trim_newlines(text: str) -> str:
    """Drop leading and trailing newline characters, keeping inner text intact."""

    start, end = 0, len(text)
    while start < end and is_newline(text[start]):
        start += 1
    while end > start and is_newline(text[end - 1]):
        end -= 1
    return text[start:end]


@total_ordering
@dataclass(frozen=True, slots=True)
class Line:
    """One line of text, independent of the indent unit used to render it.

    The payload is trimmed of surrounding newlines on construction and must
    not contain any other newline; ``indent_level`` is clamped to zero.
    Lines are immutable, so every "mutation" returns a new ``Line``.

    Ordering puts deeper lines first and falls back to the payload::

        Line("Line", 2) < Line("Line", 1) < Line("Lion", 1)
    """

    payload: str = ""
    indent_level: int = 0

    def __post_init__(self) -> None:
        trimmed = trim_newlines(self.payload)
        if not is_single_line(trimmed):
            raise LineValidationError(
                "Given string is not a single line", text=self.payload
            )
        object.__setattr__(self, "payload", trimmed)
        object.__setattr__(self, "indent_level", max(int(self.indent_level), 0))

    @classmethod
    def parse(cls, raw: str, indent_level: int = 0) -> "Line | None":
        """Return a line for ``raw``, or ``None`` if it spans several lines."""

        if not is_single_line(trim_newlines(raw)):
            return None
        return cls(raw, indent_level)

    @classmethod
    def from_indented(cls, raw: str, indent: Indent) -> "Line":
        """Build a line from text that carries ``indent`` as a literal prefix.

        >>> line = Line.from_indented("  Some Line", Indent.spaces(2))
        >>> line.indent_level, line.payload
        (1, 'Some Line')
        >>> line.render(Indent.spaces(4))
        '    Some Line'
        """

        payload, level = indent.strip(trim_newlines(raw))
        return cls(payload, level)

    @classmethod
    def parse_indented(cls, raw: str, indent: Indent) -> "Line | None":
        if not is_single_line(trim_newlines(raw)):
            return None
        return cls.from_indented(raw, indent)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        if self.indent_level != other.indent_level:
            return self.indent_level > other.indent_level
        return self.payload < other.payload

    def __add__(self, text: str) -> "Line":
        if not isinstance(text, str):
            return NotImplemented
        return self.append(text)

    def append(self, text: str) -> "Line":
        ensure_single_line(text)
        return replace(self, payload=self.payload + text)

    def shift_left(self, level: int = 1) -> "Line":
        return replace(self, indent_level=self.indent_level - level)

    def shift_right(self, level: int = 1) -> "Line":
        return replace(self, indent_level=self.indent_level + level)

    def with_indent_level(self, indent_level: int) -> "Line":
        return replace(self, indent_level=indent_level)

    def with_payload(self, payload: str) -> "Line":
        return replace(self, payload=payload)

    def render(self, indent: Indent = DEFAULT_INDENT) -> str:
        return indent.render(self.indent_level) + self.payload

    def __str__(self) -> str:
        return self.render()

    @property
    def debug_description(self) -> str:
        return f"Indent Level: {self.indent_level}, Line: {self.payload!r}"

    def rendered_length(self, indent: Indent = DEFAULT_INDENT) -> int:
        """Number of characters once rendered with ``indent``."""

        return indent.width * self.indent_level + len(self.payload)

    @property
    def is_empty(self) -> bool:
        return self.indent_level == 0 and not self.payload

    def matches(self, text: str, indent: Indent | None = None) -> bool:
        if indent is None:
            return self.payload == text
        return self.render(indent) == text

    @property
    def payload_properties(self) -> "PayloadProperties":
        return PayloadProperties(self.payload)


@dataclass(frozen=True, slots=True)
class PayloadProperties:
    """Measurements of a line's payload alone, without any indentation."""

    payload: str

    @property
    def length(self) -> int:
        """Number of code points, not grapheme clusters.

        A flag such as ``"\U0001F1EF\U0001F1F5"`` counts as 2 and a letter
        followed by a combining accent counts as 2.
        """

        return len(self.payload)

    @property
    def estimated_width(self) -> int:
        return estimated_width(self.payload)

    def encode(
        self, encoding: str = "utf-8", *, allow_lossy_conversion: bool = False
    ) -> bytes | None:
        """Encoded payload, or ``None`` when ``encoding`` cannot represent it."""

        errors = "replace" if allow_lossy_conversion else "strict"
        try:
            return self.payload.encode(encoding, errors)
        except UnicodeEncodeError:
            return None

    def matches(self, text: str) -> bool:
        return self.payload == text


EMPTY_LINE = Line()

__all__ = ["Line", "PayloadProperties", "EMPTY_LINE", "trim_newlines"]
