import pytest

from pattern_highlighter import (
    Fragment,
    InvalidPatternError,
    Line,
    Style,
    StyledText,
    highlight_text,
)

STYLE = Style(bg="BLUE")
MENTION = r"@\w+"
TEXT = "Hello @Henry. Why are you named @nobody\nBecause yes, and you @John. Btw Where @Bill is ?"


def test_highlight_text_two_lines():
    text = highlight_text("Hi @buddy\n@stranger hello", MENTION, STYLE)

    assert text == StyledText([
        Line([Fragment("Hi "), Fragment("@buddy", STYLE)]),
        Line([Fragment("@stranger", STYLE), Fragment(" hello")]),
    ])


def test_highlight_text_conversation():
    text = highlight_text(TEXT, MENTION, STYLE)

    assert text == StyledText([
        Line([
            Fragment("Hello "),
            Fragment("@Henry", STYLE),
            Fragment(". Why are you named "),
            Fragment("@nobody", STYLE),
        ]),
        Line([
            Fragment("Because yes, and you "),
            Fragment("@John", STYLE),
            Fragment(". Btw Where "),
            Fragment("@Bill", STYLE),
            Fragment(" is ?"),
        ]),
    ])
    assert text.match_count == 4


def test_highlight_text_empty_input_has_no_lines():
    assert highlight_text("", MENTION, STYLE) == StyledText()


def test_highlight_text_trailing_newline_adds_no_line():
    text = highlight_text("@a\n@b\n", MENTION, STYLE)

    assert [line.plain_text for line in text] == ["@a", "@b"]


def test_highlight_text_keeps_empty_inner_lines():
    text = highlight_text("first\n\n\nlast", MENTION, STYLE)

    assert len(text) == 4
    assert text.lines[1] == Line()
    assert text.lines[2] == Line()


def test_highlight_text_only_newlines():
    text = highlight_text("\n\n", MENTION, STYLE)

    assert text.lines == (Line(), Line())


def test_highlight_text_carriage_return_stays_in_line():
    text = highlight_text("@a\r\n@b", MENTION, STYLE)

    assert text.lines[0].fragments == (Fragment("@a", STYLE), Fragment("\r"))


@pytest.mark.parametrize(
    "source",
    ["", "one line", "a\nb", "a\nb\n", "\n", "\n\nx", "x\n\n", TEXT],
)
def test_highlight_text_line_count(source):
    text = highlight_text(source, MENTION, STYLE)

    expected = source.count("\n")
    if source and not source.endswith("\n"):
        expected += 1
    assert len(text) == expected


@pytest.mark.parametrize("source", ["a\nb", "Hi @buddy\n@stranger hello", TEXT, "x\n\ny"])
def test_highlight_text_reconstructs_input(source):
    assert highlight_text(source, MENTION, STYLE).plain_text == source


def test_highlight_text_pattern_never_spans_lines():
    text = highlight_text("a\nb", r"a\nb", STYLE)

    assert text.match_count == 0


def test_highlight_text_invalid_pattern_fails_before_any_work():
    with pytest.raises(InvalidPatternError):
        highlight_text("Hi @buddy\nmore", r"[unclosed", STYLE)

    with pytest.raises(InvalidPatternError):
        highlight_text("", r"(", STYLE)
