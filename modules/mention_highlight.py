#!/usr/bin/env python3
"""
Mention Highlight Module
Highlights @mentions such as @buddy or @John.

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

from pattern_highlighter import Style, StyledText, highlight_text

MODULE_DESCRIPTION = "Highlights @mentions (an @ followed by word characters) on a blue background."

# @ followed by one or more word characters: @buddy, @John_Doe, @user42
PATTERN = re.compile(r'@\w+')

STYLE = Style(bg='BLUE')

def highlight(text: str) -> StyledText:
    """Highlight every @mention in text."""
    return highlight_text(text, PATTERN, STYLE)
