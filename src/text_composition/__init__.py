"""Text as lines with explicit indent levels, plus indent inference."""

from .composition import (
    CARRIAGE_RETURN,
    CARRIAGE_RETURN_AND_LINE_FEED,
    DEFAULT_INDENT,
    EMPTY_LINE,
    HORIZONTAL_TAB,
    LINE_FEED,
    SPACE,
    Composition,
    CompositionContractError,
    CompositionIndexError,
    Indent,
    Line,
    LineValidationError,
    SpecificCharacter,
    detect_indent,
)

__all__ = [
    "composition",
    "runtime",
    "Composition",
    "Line",
    "Indent",
    "SpecificCharacter",
    "DEFAULT_INDENT",
    "EMPTY_LINE",
    "SPACE",
    "HORIZONTAL_TAB",
    "LINE_FEED",
    "CARRIAGE_RETURN",
    "CARRIAGE_RETURN_AND_LINE_FEED",
    "CompositionContractError",
    "CompositionIndexError",
    "LineValidationError",
    "detect_indent",
]

__version__ = "0.1.0"
