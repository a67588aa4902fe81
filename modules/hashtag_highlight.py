#!/usr/bin/env python3
"""
Hashtag Highlight Module
Highlights #hashtags such as #python or #release_2024.

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

MODULE_DESCRIPTION = "Highlights #hashtags in bright magenta. Hashtags must start with a letter or underscore, so issue numbers like #42 are left alone."

# A hashtag is not preceded by a word character (skips anchors like page#top)
PATTERN = re.compile(r'(?<!\w)#[^\W\d]\w*')

STYLE = Style(fg='MAGENTA', bright=True)

def highlight(text: str) -> StyledText:
    """Highlight every #hashtag in text."""
    return highlight_text(text, PATTERN, STYLE)
