"""Regex-driven text highlighting for terminal output."""

from .highlight_helper import (
    DEFAULT_HIGHLIGHT_STYLE,
    InvalidPatternError,
    compile_pattern,
    highlight_line,
    highlight_text,
)
from .text_model import COLOR_NAMES, Fragment, Line, Style, StyledText

__version__ = '1.0.0'

__all__ = [
    'COLOR_NAMES',
    'DEFAULT_HIGHLIGHT_STYLE',
    'Fragment',
    'InvalidPatternError',
    'Line',
    'Style',
    'StyledText',
    'compile_pattern',
    'highlight_line',
    'highlight_text',
]
