"""Line and composition data model with indent inference."""

from .characters import (
    CARRIAGE_RETURN,
    CARRIAGE_RETURN_AND_LINE_FEED,
    HORIZONTAL_TAB,
    LINE_FEED,
    SPACE,
    CharacterKind,
    SpecificCharacter,
    is_newline,
    is_space_like,
)
from .document import NO_LAST_NEWLINE_MARKER, Composition
from .indent import DEFAULT_INDENT, Indent
from .inference import (
    IndentStatistics,
    consume_last_newline,
    detect_indent,
    greatest_common_divisor,
    split_fragments,
)
from .line import EMPTY_LINE, Line, PayloadProperties
from .validation import (
    CompositionContractError,
    CompositionIndexError,
    LineValidationError,
    ensure_index,
    ensure_single_line,
)
from .width import estimated_width

__all__ = [
    "CharacterKind",
    "SpecificCharacter",
    "SPACE",
    "HORIZONTAL_TAB",
    "LINE_FEED",
    "CARRIAGE_RETURN",
    "CARRIAGE_RETURN_AND_LINE_FEED",
    "is_newline",
    "is_space_like",
    "Indent",
    "DEFAULT_INDENT",
    "Line",
    "PayloadProperties",
    "EMPTY_LINE",
    "IndentStatistics",
    "split_fragments",
    "consume_last_newline",
    "detect_indent",
    "greatest_common_divisor",
    "Composition",
    "NO_LAST_NEWLINE_MARKER",
    "CompositionContractError",
    "CompositionIndexError",
    "LineValidationError",
    "ensure_index",
    "ensure_single_line",
    "estimated_width",
]
