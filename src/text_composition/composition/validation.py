"""Contract checks shared across the composition model.

A failed check means the caller handed over structurally invalid input (a
multi-line string where one line was required, an index outside the
sequence). These are programming errors and surface as exceptions rather
than ``None`` results.
"""

from __future__ import annotations

from .characters import is_newline


class CompositionContractError(RuntimeError):
    """Base class for violated preconditions of the composition model."""


class LineValidationError(CompositionContractError, ValueError):
    """Raised when text expected to be a single line contains a newline."""

    def __init__(self, message: str, *, text: str | None = None) -> None:
        super().__init__(message)
        self.text = text


class CompositionIndexError(CompositionContractError, IndexError):
    """Raised when an index or bound falls outside ``0..len``."""

    def __init__(
        self, message: str, *, index: int | None = None, bounds: tuple[int, int] | None = None
    ) -> None:
        super().__init__(message)
        self.index = index
        self.bounds = bounds


def is_single_line(text: str) -> bool:
    return not any(is_newline(character) for character in text)


def ensure_single_line(text: str) -> str:
    if not is_single_line(text):
        raise LineValidationError("Given string is not a single line", text=text)
    return text


def ensure_index(index: int, length: int) -> int:
    """Check ``0 <= index <= length``; insertion points include the end."""

    if index < 0 or index > length:
        raise CompositionIndexError(
            f"Index {index} out of range", index=index, bounds=(0, length)
        )
    return index


def ensure_non_negative(value: int, *, name: str) -> int:
    if value < 0:
        raise CompositionContractError(f"{name} must be non-negative, got {value}")
    return value
