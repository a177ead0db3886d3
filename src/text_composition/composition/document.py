"""Composition: an ordered, editable sequence of lines plus rendering settings."""

from __future__ import annotations

import codecs
from collections.abc import MutableSequence
from typing import Iterable, Iterator, List, Optional, overload

from text_composition.runtime import telemetry

from .characters import LINE_FEED, CharacterKind, SpecificCharacter
from .indent import DEFAULT_INDENT, Indent
from .inference import IndentStatistics, consume_last_newline, split_fragments
from .line import EMPTY_LINE, Line
from .validation import (
    CompositionIndexError,
    ensure_index,
    ensure_non_negative,
)

LOGGER_NAME = "text_composition.composition"
NO_LAST_NEWLINE_MARKER = "\U0001F6AB"

LineRange = range | slice


def _check_line(value: object) -> Line:
    if not isinstance(value, Line):
        raise TypeError(f"Composition holds Line values, got {type(value).__name__}")
    return value


class Composition(MutableSequence[Line]):
    """A block of text as lines with explicit indent levels.

    ``indent`` and ``newline`` only affect rendering; the levels stored on the
    lines never change when they are reassigned. ``has_last_newline`` records
    whether the rendered text ends with a newline after the final line.

    Slices are views: they share the parent's backing list until either side
    is mutated, at which point the mutating side takes a private copy. Copies
    made with ``copy()`` behave the same way, so every composition can be
    edited without affecting another.
    """

    def __init__(
        self,
        lines: Iterable[Line] = (),
        *,
        indent: Indent = DEFAULT_INDENT,
        newline: SpecificCharacter | str = LINE_FEED,
        has_last_newline: Optional[bool] = None,
    ) -> None:
        self._storage: List[Line] = [_check_line(line) for line in lines]
        self._start = 0
        self._stop = len(self._storage)
        self._shared = False
        self.indent = indent
        self.newline = newline
        if has_last_newline is None:
            has_last_newline = bool(self._storage)
        self.has_last_newline = has_last_newline

    @classmethod
    def repeating(cls, line: Line, count: int) -> "Composition":
        ensure_non_negative(count, name="count")
        return cls([_check_line(line)] * count)

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        indent: Optional[Indent] = None,
        detect_indent: bool = True,
    ) -> "Composition":
        """Split ``text`` into lines.

        With an explicit ``indent`` every line is parsed against it. Otherwise,
        when ``detect_indent`` is set, the indent unit is inferred from the
        text and kept as the composition's ``indent``. Without either, every
        line gets level 0 and keeps its leading whitespace in the payload.
        """

        with telemetry.span(
            "composition::from_text",
            logger_name=LOGGER_NAME,
            component="composition",
            metadata={"length": len(text), "detect_indent": detect_indent},
        ) as handle:
            fragments, has_last_newline = consume_last_newline(split_fragments(text))

            if indent is None and detect_indent:
                statistics = IndentStatistics.collect(fragments)
                indent = statistics.infer()
                if indent is None:
                    telemetry.record_event(
                        "indent.not_detected",
                        level="debug",
                        data={"fragments": len(fragments)},
                        logger_name=LOGGER_NAME,
                    )
                else:
                    telemetry.record_event(
                        "indent.inferred",
                        level="debug",
                        data={
                            "character": repr(indent.character.value),
                            "width": indent.width,
                            "tallies": statistics.tallies,
                        },
                        logger_name=LOGGER_NAME,
                    )

            if indent is None:
                lines = [Line(fragment) for fragment in fragments]
            else:
                lines = [Line.from_indented(fragment, indent) for fragment in fragments]
            handle.add_metadata("lines", len(lines))

            return cls(
                lines,
                indent=indent or DEFAULT_INDENT,
                has_last_newline=has_last_newline,
            )

    @classmethod
    def _view(
        cls, parent: "Composition", start: int, stop: int, has_last_newline: bool
    ) -> "Composition":
        view = cls.__new__(cls)
        view._storage = parent._storage
        view._start = parent._start + start
        view._stop = parent._start + stop
        view._shared = True
        view._indent = parent._indent
        view._newline = parent._newline
        view.has_last_newline = has_last_newline
        parent._shared = True
        return view

    # -- settings -----------------------------------------------------------

    @property
    def indent(self) -> Indent:
        return self._indent

    @indent.setter
    def indent(self, value: Indent) -> None:
        if not isinstance(value, Indent):
            raise TypeError(f"indent must be an Indent, got {type(value).__name__}")
        self._indent = value

    @property
    def newline(self) -> SpecificCharacter:
        return self._newline

    @newline.setter
    def newline(self, value: SpecificCharacter | str) -> None:
        if isinstance(value, str):
            value = SpecificCharacter.newline(value)
        elif value.kind is not CharacterKind.NEWLINE:
            raise ValueError(f"{value.value!r} is not a newline character")
        self._newline = value

    # -- storage ------------------------------------------------------------

    def _make_unique(self) -> None:
        if self._shared:
            self._storage = self._storage[self._start:self._stop]
            self._start = 0
            self._stop = len(self._storage)
            self._shared = False

    def _sync_bounds(self) -> None:
        self._stop = len(self._storage)

    def _position(self, index: int) -> int:
        length = len(self)
        position = index + length if index < 0 else index
        if position < 0 or position >= length:
            raise CompositionIndexError(
                f"Line index {index} out of range", index=index, bounds=(0, length)
            )
        return position

    def _bounds(self, key: slice) -> tuple[int, int]:
        start, stop, step = key.indices(len(self))
        if step != 1:
            raise ValueError("Composition slices do not support a step")
        return start, max(start, stop)

    def _resolve_range(self, within: Optional[LineRange]) -> range:
        length = len(self)
        if within is None:
            return range(length)
        if isinstance(within, slice):
            return range(*within.indices(length))
        for index in within:
            if index < 0 or index >= length:
                raise CompositionIndexError(
                    f"Line index {index} out of range", index=index, bounds=(0, length)
                )
        return within

    def __len__(self) -> int:
        return self._stop - self._start

    def __iter__(self) -> Iterator[Line]:
        storage = self._storage
        for position in range(self._start, self._stop):
            yield storage[position]

    @overload
    def __getitem__(self, index: int) -> Line: ...

    @overload
    def __getitem__(self, index: slice) -> "Composition": ...

    def __getitem__(self, index: int | slice) -> "Line | Composition":
        if isinstance(index, slice):
            start, stop = self._bounds(index)
            has_last_newline = self.has_last_newline if stop == len(self) else True
            return Composition._view(self, start, stop, has_last_newline)
        return self._storage[self._start + self._position(index)]

    def __setitem__(self, index, value) -> None:  # type: ignore[override]
        if isinstance(index, slice):
            start, stop = self._bounds(index)
            self.replace_subrange(start, stop, value)
            return
        position = self._position(index)
        line = _check_line(value)
        self._make_unique()
        self._storage[position] = line

    def __delitem__(self, index: int | slice) -> None:
        if isinstance(index, slice):
            start, stop = self._bounds(index)
            self.replace_subrange(start, stop, ())
            return
        position = self._position(index)
        self._make_unique()
        del self._storage[position]
        self._sync_bounds()

    def snapshot(self) -> tuple[Line, ...]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self)

    def copy(self) -> "Composition":
        return Composition._view(self, 0, len(self), self.has_last_newline)

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Composition):
            return NotImplemented
        return (
            self.indent == other.indent
            and self.newline == other.newline
            and self.has_last_newline == other.has_last_newline
            and len(self) == len(other)
            and all(left == right for left, right in zip(self, other))
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Composition({list(self)!r}, indent={self.indent!r}, "
            f"newline={self.newline.value!r}, has_last_newline={self.has_last_newline})"
        )

    # -- editing ------------------------------------------------------------

    def append(
        self,
        line: Line | str,
        *,
        indent_level: Optional[int] = None,
        increasing_indent_level: int = 0,
        decreasing_indent_level: int = 0,
    ) -> None:
        """Append ``line``; a string is turned into a line first.

        A string must be a single line. ``indent_level`` sets the level of the
        appended line; the increasing/decreasing deltas are applied on top of
        it and the result never drops below zero.
        """

        if isinstance(line, str):
            line = Line(line, indent_level or 0)
        else:
            line = _check_line(line)
            if indent_level is not None:
                line = line.with_indent_level(indent_level)
        delta = increasing_indent_level - decreasing_indent_level
        if delta:
            line = line.shift_right(delta)
        self._make_unique()
        self._storage.append(line)
        self._sync_bounds()

    def extend(
        self,
        lines: Iterable[Line],
        *,
        increasing_indent_level: int = 0,
        decreasing_indent_level: int = 0,
    ) -> None:
        delta = increasing_indent_level - decreasing_indent_level
        adjusted = [_check_line(line) for line in lines]
        if delta:
            adjusted = [line.shift_right(delta) for line in adjusted]
        self._make_unique()
        self._storage.extend(adjusted)
        self._sync_bounds()

    def append_empty_line(self) -> None:
        self.append(EMPTY_LINE)

    def insert(self, index: int, line: Line) -> None:
        ensure_index(index, len(self))
        line = _check_line(line)
        self._make_unique()
        self._storage.insert(index, line)
        self._sync_bounds()

    def insert_lines(self, index: int, lines: Iterable[Line]) -> None:
        self.replace_subrange(index, index, lines)

    def replace_subrange(self, start: int, stop: int, lines: Iterable[Line]) -> None:
        """Replace lines ``start`` (inclusive) to ``stop`` (exclusive)."""

        length = len(self)
        ensure_index(start, length)
        ensure_index(stop, length)
        if start > stop:
            raise CompositionIndexError(
                f"Invalid range {start}..<{stop}", index=start, bounds=(0, length)
            )
        replacement = [_check_line(line) for line in lines]
        self._make_unique()
        self._storage[start:stop] = replacement
        self._sync_bounds()

    def _shift(self, level: int, within: Optional[LineRange], *, right: bool) -> None:
        positions = self._resolve_range(within)
        self._make_unique()
        storage = self._storage
        for position in positions:
            line = storage[position]
            storage[position] = line.shift_right(level) if right else line.shift_left(level)

    def shift_left(self, level: int = 1, within: Optional[LineRange] = None) -> None:
        """Decrease the indent level of the lines in ``within`` (all by default)."""

        self._shift(level, within, right=False)

    def shift_right(self, level: int = 1, within: Optional[LineRange] = None) -> None:
        self._shift(level, within, right=True)

    def drop_first(self, count: int = 1) -> "Composition":
        ensure_non_negative(count, name="count")
        return self[count:]

    def drop_last(self, count: int = 1) -> "Composition":
        ensure_non_negative(count, name="count")
        return self[: max(len(self) - count, 0)]

    # -- rendering ----------------------------------------------------------

    def render(self) -> str:
        newline = self.newline.value
        result = newline.join(line.render(self.indent) for line in self)
        if self.has_last_newline:
            result += newline
        return result

    def __str__(self) -> str:
        return self.render()

    @property
    def description(self) -> str:
        return self.render()

    @property
    def debug_description(self) -> str:
        """Numbered listing of the rendered lines.

        A missing trailing newline is marked on the last line.
        """

        count = len(self)
        number_width = len(str(count))
        newline = self.newline.value
        parts: list[str] = []
        for position, line in enumerate(self):
            number = str(position + 1)
            padding = " " * (number_width - len(number))
            parts.append(f"{padding}L{number}. {line.render(self.indent)}")
            if position < count - 1 or self.has_last_newline:
                parts.append(newline)
            else:
                parts.append(f"{NO_LAST_NEWLINE_MARKER}\n")
        return "".join(parts)

    def encode(
        self, encoding: str = "utf-8", *, allow_lossy_conversion: bool = False
    ) -> bytes | None:
        """Encode the rendered text, or return ``None`` if it is not representable.

        The result equals ``render().encode(encoding)``. Indent and newline
        bytes are encoded once and reused while the encoder sits in its
        initial shift state; stateful codecs such as ``iso2022_jp`` get them
        encoded inline otherwise. With ``allow_lossy_conversion``
        unrepresentable characters become ``?``; otherwise a single bad
        character fails the whole encode.
        """

        errors = "replace" if allow_lossy_conversion else "strict"
        with telemetry.span(
            "composition::encode",
            logger_name=LOGGER_NAME,
            component="composition",
            metadata={"encoding": encoding, "lines": len(self)},
        ):
            make_encoder = codecs.getincrementalencoder(encoding)
            encoder = make_encoder(errors)
            part = "header"
            try:
                result = bytearray(encoder.encode(""))
                initial_state = encoder.getstate()
                part = "indent"
                indent = self.indent.description
                indent_bytes = _reusable_bytes(make_encoder, errors, indent)
                part = "newline"
                newline = self.newline.value
                newline_bytes = _reusable_bytes(make_encoder, errors, newline)

                def emit(text: str, cached: bytes | None, repeat: int = 1) -> None:
                    if cached is not None and encoder.getstate() == initial_state:
                        result.extend(cached * repeat)
                    else:
                        result.extend(encoder.encode(text * repeat))

                for position, line in enumerate(self):
                    part = f"line {position + 1}"
                    if position:
                        emit(newline, newline_bytes)
                    emit(indent, indent_bytes, line.indent_level)
                    result += encoder.encode(line.payload)
                if self.has_last_newline:
                    emit(newline, newline_bytes)
                result += encoder.encode("", final=True)
            except UnicodeEncodeError as exc:
                telemetry.record_event(
                    "encode.failed",
                    level="warning",
                    data={"encoding": encoding, "part": part, "reason": exc.reason},
                    logger_name=LOGGER_NAME,
                )
                return None
            return bytes(result)


def _reusable_bytes(make_encoder, errors: str, text: str) -> bytes | None:
    """Bytes for ``text`` from a fresh encoder, if it ends in its initial state.

    ``None`` means the codec changes shift state for ``text``, so the bytes
    cannot be pasted between other chunks.
    """

    encoder = make_encoder(errors)
    encoder.encode("")
    initial_state = encoder.getstate()
    encoded = encoder.encode(text)
    return encoded if encoder.getstate() == initial_state else None


__all__ = ["Composition", "NO_LAST_NEWLINE_MARKER"]
