#!/usr/bin/env python3
"""
Text Model Library
Immutable value types produced by the highlighter: styles, fragments, lines and styled text.

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

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from colorama import Back, Fore
from colorama import Style as AnsiStyle

# Color names understood by colorama (Fore and Back share the same names)
COLOR_NAMES = tuple(sorted(
    name for name in dir(Fore)
    if name.isupper() and name != 'RESET'
))


def _normalize_color(value: Optional[str], field_name: str) -> Optional[str]:
    if value is None:
        return None
    name = value.strip().upper()
    if name not in COLOR_NAMES:
        raise ValueError(f"Unknown {field_name} color '{value}'. Expected one of: {', '.join(COLOR_NAMES)}")
    return name


@dataclass(frozen=True)
class Style:
    """Opaque highlight style: foreground/background color plus intensity flags."""
    fg: Optional[str] = None
    bg: Optional[str] = None
    bright: bool = False
    dim: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'fg', _normalize_color(self.fg, 'foreground'))
        object.__setattr__(self, 'bg', _normalize_color(self.bg, 'background'))

    @property
    def is_empty(self) -> bool:
        return self.fg is None and self.bg is None and not self.bright and not self.dim

    def ansi_prefix(self) -> str:
        """Return the colorama escape codes that switch this style on."""
        codes = []
        if self.fg:
            codes.append(getattr(Fore, self.fg))
        if self.bg:
            codes.append(getattr(Back, self.bg))
        if self.bright:
            codes.append(AnsiStyle.BRIGHT)
        if self.dim:
            codes.append(AnsiStyle.DIM)
        return ''.join(codes)

    def apply(self, text: str) -> str:
        """Wrap text in this style's escape codes, resetting afterwards."""
        if self.is_empty or not text:
            return text
        return f'{self.ansi_prefix()}{text}{AnsiStyle.RESET_ALL}'

    def to_dict(self) -> Dict[str, Any]:
        return {'fg': self.fg, 'bg': self.bg, 'bright': self.bright, 'dim': self.dim}


@dataclass(frozen=True)
class Fragment:
    """A contiguous piece of text, highlighted when it carries a style."""
    content: str
    style: Optional[Style] = None

    @property
    def is_highlighted(self) -> bool:
        return self.style is not None

    def render(self, color: bool = True) -> str:
        if color and self.style is not None:
            return self.style.apply(self.content)
        return self.content

    def to_dict(self) -> Dict[str, Any]:
        return {
            'content': self.content,
            'style': self.style.to_dict() if self.style is not None else None,
        }


@dataclass(frozen=True)
class Line:
    """
    One renderable row of fragments.

    Concatenating the fragment contents gives back the original line verbatim.
    """
    fragments: Tuple[Fragment, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'fragments', tuple(self.fragments))

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self.fragments)

    def __len__(self) -> int:
        return len(self.fragments)

    @property
    def plain_text(self) -> str:
        return ''.join(fragment.content for fragment in self.fragments)

    @property
    def highlighted(self) -> List[Fragment]:
        return [fragment for fragment in self.fragments if fragment.is_highlighted]

    def render(self, color: bool = True) -> str:
        return ''.join(fragment.render(color) for fragment in self.fragments)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.plain_text,
            'fragments': [fragment.to_dict() for fragment in self.fragments],
        }


@dataclass(frozen=True)
class StyledText:
    """An ordered sequence of highlighted lines making up a whole document."""
    lines: Tuple[Line, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'lines', tuple(self.lines))

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def plain_text(self) -> str:
        return '\n'.join(line.plain_text for line in self.lines)

    @property
    def match_count(self) -> int:
        """Number of non-empty highlighted fragments; zero-length matches are not counted."""
        return sum(1 for line in self.lines for fragment in line.highlighted if fragment.content)

    def render(self, color: bool = True, line_numbers: bool = False) -> str:
        """
        Render the text for a terminal.

        Args:
            color: Emit colorama escape codes for highlighted fragments
            line_numbers: Prefix each line with its 1-based line number

        Returns:
            The rendered lines joined with newlines
        """
        rendered = []
        width = len(str(len(self.lines)))
        for line_num, line in enumerate(self.lines, 1):
            if line_numbers:
                rendered.append(f'{line_num:>{width}}: {line.render(color)}')
            else:
                rendered.append(line.render(color))
        return '\n'.join(rendered)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'line_count': len(self.lines),
            'match_count': self.match_count,
            'lines': [line.to_dict() for line in self.lines],
        }
