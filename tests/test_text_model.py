import dataclasses

import pytest
from colorama import Back, Fore
from colorama import Style as AnsiStyle

from pattern_highlighter import Fragment, Line, Style, StyledText, highlight_text

STYLE = Style(bg="BLUE")


def test_style_normalizes_color_names():
    assert Style(fg="red", bg=" lightblue_ex ") == Style(fg="RED", bg="LIGHTBLUE_EX")


def test_style_rejects_unknown_color():
    with pytest.raises(ValueError, match="Unknown foreground color 'purple'"):
        Style(fg="purple")


def test_style_apply_wraps_in_colorama_codes():
    assert STYLE.apply("x") == Back.BLUE + "x" + AnsiStyle.RESET_ALL
    assert Style(fg="RED", bright=True).apply("x") == Fore.RED + AnsiStyle.BRIGHT + "x" + AnsiStyle.RESET_ALL


def test_empty_style_renders_unchanged():
    assert Style().apply("x") == "x"
    assert STYLE.apply("") == ""


def test_values_are_immutable():
    fragment = Fragment("x", STYLE)
    with pytest.raises(dataclasses.FrozenInstanceError):
        fragment.content = "y"

    line = Line([fragment])
    assert isinstance(line.fragments, tuple)


def test_styles_are_hashable():
    assert len({Style(bg="BLUE"), Style(bg="blue"), Style(fg="RED")}) == 2


def test_line_render():
    line = Line([Fragment("Hi "), Fragment("@buddy", STYLE)])

    assert line.render() == "Hi " + Back.BLUE + "@buddy" + AnsiStyle.RESET_ALL
    assert line.render(color=False) == "Hi @buddy"


def test_styled_text_render_with_line_numbers():
    text = highlight_text("a\n" * 9 + "@b", r"@\w+", STYLE)

    rendered = text.render(color=False, line_numbers=True).split("\n")

    assert rendered[0] == " 1: a"
    assert rendered[-1] == "10: @b"


def test_styled_text_render_without_color_is_plain_text():
    source = "Hi @buddy\n@stranger hello"

    assert highlight_text(source, r"@\w+", STYLE).render(color=False) == source


def test_styled_text_to_dict():
    text = StyledText([Line([Fragment("Hi "), Fragment("@buddy", STYLE)])])

    assert text.to_dict() == {
        "line_count": 1,
        "match_count": 1,
        "lines": [
            {
                "text": "Hi @buddy",
                "fragments": [
                    {"content": "Hi ", "style": None},
                    {"content": "@buddy", "style": {"fg": None, "bg": "BLUE", "bright": False, "dim": False}},
                ],
            }
        ],
    }


def test_match_count_ignores_zero_length_matches():
    assert highlight_text("ab", r"x*", STYLE).match_count == 0
    assert highlight_text("ab\nxa", r"x*", STYLE).match_count == 1
