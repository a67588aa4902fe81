#!/usr/bin/env python3
"""
URL Highlight Module
Highlights http, https and ftp URLs.

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

MODULE_DESCRIPTION = "Highlights http://, https:// and ftp:// URLs in cyan. Trailing sentence punctuation is not treated as part of the URL."

# Scheme, then any run of non-space characters that does not end in punctuation
PATTERN = re.compile(
    r'\b(?:https?|ftp)://'   # scheme
    r'[^\s<>"]*'             # host, path, query
    r'[^\s<>".,;:!?)\]\'"]', # last character is not punctuation
    re.IGNORECASE
)

STYLE = Style(fg='CYAN')

def highlight(text: str) -> StyledText:
    """Highlight every URL in text."""
    return highlight_text(text, PATTERN, STYLE)
