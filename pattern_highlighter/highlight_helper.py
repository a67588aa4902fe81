#!/usr/bin/env python3
"""
Highlight Helper Library
Splits text into plain and highlighted fragments wherever a regular expression matches.

Author: Garland Glessner <gglessner@gmail.com>
License: GNU General Public License v3.0
Copyright (C) 2024 Garland Glessner

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

import re
from typing import Pattern, Union

from .text_model import Fragment, Line, Style, StyledText

PatternLike = Union[str, Pattern[str]]

DEFAULT_HIGHLIGHT_STYLE = Style(bg='BLUE')


class InvalidPatternError(ValueError):
    """Raised when a highlight pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid highlight pattern '{pattern}': {reason}")


def compile_pattern(pattern: PatternLike, ignore_case: bool = False, fixed_strings: bool = False) -> Pattern[str]:
    """
    Compile a highlight pattern.

    Args:
        pattern: Regular expression text, or an already compiled pattern
        ignore_case: Match case-insensitively
        fixed_strings: Treat the pattern as a literal string instead of a regular expression

    Returns:
        The compiled pattern. A compiled pattern is returned as is when no flag is
        set, otherwise it is recompiled from its source with the extra flags.

    Raises:
        InvalidPatternError: If the pattern is not a valid regular expression
    """
    flags = re.IGNORECASE if ignore_case else 0
    if isinstance(pattern, re.Pattern):
        if not ignore_case and not fixed_strings:
            return pattern
        flags |= pattern.flags
        pattern = pattern.pattern
    source = re.escape(pattern) if fixed_strings else pattern
    try:
        return re.compile(source, flags)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


def highlight_line(line: str, pattern: PatternLike, highlight_style: Style = DEFAULT_HIGHLIGHT_STYLE) -> Line:
    """
    Build a Line from a single line of text, applying highlight_style to every match of pattern.

    Unmatched gaps become plain fragments; empty gaps are never emitted, so an empty
    line yields a Line with no fragments.

    Args:
        line: The line of text to highlight
        pattern: Regular expression selecting the text to highlight
        highlight_style: Style attached to the matching fragments

    Returns:
        Line whose fragments concatenate back to line

    Raises:
        InvalidPatternError: If pattern is not a valid regular expression
    """
    regex = compile_pattern(pattern)
    fragments = []
    last_index = 0

    for match in regex.finditer(line):
        if match.start() > last_index:
            fragments.append(Fragment(line[last_index:match.start()]))
        fragments.append(Fragment(match.group(0), highlight_style))
        last_index = match.end()

    if len(line) > last_index:
        fragments.append(Fragment(line[last_index:]))

    return Line(fragments)


def highlight_text(text: str, pattern: PatternLike, highlight_style: Style = DEFAULT_HIGHLIGHT_STYLE) -> StyledText:
    """
    Build StyledText from text, starting a new Line at every '\\n'.

    A trailing newline does not produce an extra empty line and empty text
    produces no lines at all. The pattern is validated before any line is
    highlighted, even when text is empty.

    Raises:
        InvalidPatternError: If pattern is not a valid regular expression
    """
    regex = compile_pattern(pattern)
    lines = []
    last_index = 0

    newline = text.find('\n')
    while newline != -1:
        lines.append(highlight_line(text[last_index:newline], regex, highlight_style))
        last_index = newline + 1
        newline = text.find('\n', last_index)

    if len(text) > last_index:
        lines.append(highlight_line(text[last_index:], regex, highlight_style))

    return StyledText(lines)
