import pytest

from text_composition.composition import (
    DEFAULT_INDENT,
    HORIZONTAL_TAB,
    CompositionContractError,
    Indent,
)


def test_default_indent_is_two_spaces() -> None:
    assert DEFAULT_INDENT == Indent.spaces(2)
    assert str(Indent()) == "  "


def test_width_is_clamped() -> None:
    assert Indent.spaces(-3).width == 0
    assert Indent.tabs(2).with_width(-1).width == 0


def test_string_character_is_coerced() -> None:
    indent = Indent("\t", 1)

    assert indent.character == HORIZONTAL_TAB
    assert indent == Indent.tabs(1)

    with pytest.raises(ValueError):
        Indent("x", 1)


def test_render_for_level() -> None:
    assert Indent.spaces(2).render(3) == " " * 6
    assert Indent.tabs(1).render(2) == "\t\t"
    assert Indent.spaces(4).render(0) == ""

    with pytest.raises(CompositionContractError):
        Indent.spaces(2).render(-1)


def test_strip_counts_whole_prefixes() -> None:
    indent = Indent.spaces(2)

    assert indent.strip("    x") == ("x", 2)
    assert indent.strip("   x") == (" x", 1)
    assert indent.strip("\t  x") == ("\t  x", 0)
    assert indent.level_of("      ") == 3
    assert indent.drop("x") is None
    assert indent.drop("  x") == "x"


def test_zero_width_never_strips() -> None:
    assert Indent.spaces(0).strip("  x") == ("  x", 0)


def test_ordering_uses_rendered_string() -> None:
    assert Indent.tabs(1) < Indent.spaces(1)
    assert Indent.spaces(2) < Indent.spaces(4)
    assert max(Indent.spaces(1), Indent.spaces(3)) == Indent.spaces(3)
