import pytest

from text_composition.composition import (
    Indent,
    IndentStatistics,
    consume_last_newline,
    detect_indent,
    greatest_common_divisor,
    split_fragments,
)


def test_split_keeps_empty_fragments() -> None:
    assert split_fragments("A\n\n") == ["A", "", ""]
    assert split_fragments("") == [""]


def test_split_on_every_newline_variant() -> None:
    assert split_fragments("a\r\nb\rc\nd\u2028e") == ["a", "b", "c", "d", "e"]
    assert split_fragments("a\r\n\r\n") == ["a", "", ""]


def test_consume_last_newline() -> None:
    assert consume_last_newline([]) == ([], False)
    assert consume_last_newline([""]) == ([], False)
    assert consume_last_newline(["A", ""]) == (["A"], True)
    assert consume_last_newline(["", ""]) == ([""], True)
    assert consume_last_newline(["A", "B"]) == (["A", "B"], False)


def test_greatest_common_divisor() -> None:
    assert greatest_common_divisor([4]) == 4
    assert greatest_common_divisor({2, 4}) == 2
    assert greatest_common_divisor([6, 4, 12]) == 2
    assert greatest_common_divisor([3, 5]) == 1

    with pytest.raises(ValueError):
        greatest_common_divisor([])


def test_detect_two_spaces_from_mixed_depths() -> None:
    text = "a {\n  b {\n    c\n  }\n}\n"

    assert detect_indent(text) == Indent.spaces(2)


def test_detect_four_spaces() -> None:
    assert detect_indent("def f():\n    return 1\n") == Indent.spaces(4)


def test_detect_gcd_of_separate_blocks() -> None:
    text = "one:\n      six\ntwo:\n    four\n"

    assert detect_indent(text) == Indent.spaces(2)


def test_detect_tabs() -> None:
    assert detect_indent("a\n\tb\n\t\tc") == Indent.tabs(1)


def test_dominant_character_wins() -> None:
    text = "a\n\tb\n\tc\n  d"

    assert detect_indent(text) == Indent.tabs(1)


def test_tie_goes_to_first_seen_character() -> None:
    assert detect_indent("x\n  a\n\tb") == Indent.spaces(2)
    assert detect_indent("x\n\tb\n  a") == Indent.tabs(1)


def test_no_candidate_returns_none() -> None:
    assert detect_indent("a\nb\n") is None
    assert detect_indent("") is None


def test_separator_control_characters_do_not_vote() -> None:
    assert detect_indent("a\n\x1fb\n\x1f\x1fc") is None
    assert detect_indent("a\n\x1c  b\n  c") == Indent.spaces(2)


def test_only_first_character_is_inspected() -> None:
    assert detect_indent("x    y\nz") is None


def test_statistics_collect() -> None:
    statistics = IndentStatistics.collect(["  a", "    b", "\tc", "d", ""])

    assert statistics.tallies == {" ": 2, "\t": 1}
    assert statistics.widths == {" ": {2, 4}, "\t": {1}}
    assert statistics.dominant_character() == " "
    assert not statistics.is_empty
    assert IndentStatistics().infer() is None


def test_detect_accepts_fragments() -> None:
    assert detect_indent(["   a", "      b"]) == Indent.spaces(3)
