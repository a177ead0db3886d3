"""Splitting raw text into fragments and inferring its indent unit.

Detection works per fragment (the text between two newline boundaries):

1. every fragment whose first character is space-like votes for that
   character, and the length of its leading run of that exact character is
   recorded as a candidate width;
2. the character with the most votes wins (on a tie, the one seen first);
3. the indent width is the greatest common divisor of every run length
   recorded for the winner, so blocks nested by 2 and 4 spaces settle on 2.

Only the first character of a fragment is inspected. A fragment that starts
with a non-space character is never considered, even if it is followed by a
consistent run of whitespace.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import reduce
from math import gcd
from typing import Dict, Iterable, List, Sequence, Set

from .characters import CRLF, NEWLINE_CHARACTERS, SpecificCharacter, is_space_like
from .indent import Indent

_NEWLINE_PATTERN = re.compile(
    "|".join([re.escape(CRLF)] + [re.escape(ch) for ch in sorted(NEWLINE_CHARACTERS)])
)


def split_fragments(text: str) -> List[str]:
    """Split at every newline boundary, keeping empty fragments.

    ``"A\\n\\n"`` gives ``["A", "", ""]``; CR+LF counts as one boundary.
    """

    return _NEWLINE_PATTERN.split(text)


def consume_last_newline(fragments: Sequence[str]) -> tuple[List[str], bool]:
    """Drop the empty fragment left behind by a trailing newline.

    Returns the remaining fragments and whether a trailing newline was found.
    No fragments, or one empty fragment, means an empty text without one.
    """

    if not fragments or (len(fragments) == 1 and not fragments[0]):
        return [], False
    if not fragments[-1]:
        return list(fragments[:-1]), True
    return list(fragments), False


def leading_run(character: str, fragment: str) -> int:
    count = 0
    for current in fragment:
        if current != character:
            break
        count += 1
    return count


def greatest_common_divisor(widths: Iterable[int]) -> int:
    """Euclidean GCD over a non-empty collection of positive widths."""

    values = list(widths)
    if not values:
        raise ValueError("greatest_common_divisor() requires at least one width")
    return reduce(gcd, values)


@dataclass(slots=True)
class IndentStatistics:
    """Votes and observed run lengths for each candidate indent character."""

    tallies: Dict[str, int] = field(default_factory=dict)
    widths: Dict[str, Set[int]] = field(default_factory=dict)

    @classmethod
    def collect(cls, fragments: Iterable[str]) -> "IndentStatistics":
        statistics = cls()
        for fragment in fragments:
            statistics.observe(fragment)
        return statistics

    def observe(self, fragment: str) -> None:
        if not fragment or not is_space_like(fragment[0]):
            return
        first = fragment[0]
        self.tallies[first] = self.tallies.get(first, 0) + 1
        self.widths.setdefault(first, set()).add(leading_run(first, fragment))

    @property
    def is_empty(self) -> bool:
        return not self.tallies

    def dominant_character(self) -> str | None:
        if not self.tallies:
            return None
        # max() keeps the first maximal key, i.e. the character seen first.
        return max(self.tallies, key=self.tallies.__getitem__)

    def infer(self) -> Indent | None:
        character = self.dominant_character()
        if character is None:
            return None
        width = greatest_common_divisor(self.widths[character])
        return Indent(SpecificCharacter.space(character), width)


def detect_indent(source: str | Iterable[str]) -> Indent | None:
    """Infer the indent unit of raw text or of already split fragments."""

    fragments = split_fragments(source) if isinstance(source, str) else source
    return IndentStatistics.collect(fragments).infer()


__all__ = [
    "IndentStatistics",
    "consume_last_newline",
    "detect_indent",
    "greatest_common_divisor",
    "leading_run",
    "split_fragments",
]
