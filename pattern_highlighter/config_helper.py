#!/usr/bin/env python3
"""
Configuration Helper Library
Provides helper functions for reading highlight settings and resolving In_Config patterns from Config.xlsx files.

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
import logging
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from .highlight_helper import DEFAULT_HIGHLIGHT_STYLE
from .text_model import Style

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = 'Config.xlsx'

# Matches [In_Config("key")], [In_Config("key").ToString] and the &quot; escaped forms
IN_CONFIG_PATTERN = re.compile(
    r'^\s*\[\s*In_Config\s*\(\s*(?:&quot;|")([^"&]+)(?:&quot;|")\s*\)(?:\s*\.\s*ToString)?\s*\]\s*$',
    re.IGNORECASE
)

TRUE_VALUES = {'true', 'yes', '1', 'x'}


class ConfigError(ValueError):
    """Raised when highlight settings cannot be read or resolved."""


@dataclass
class HighlightSettings:
    """Highlight settings read from Config.xlsx."""
    pattern: Optional[str] = None
    style: Style = field(default_factory=lambda: DEFAULT_HIGHLIGHT_STYLE)
    ignore_case: bool = False
    fixed_strings: bool = False


def parse_in_config_pattern(value: str) -> Optional[str]:
    """
    Parse an In_Config pattern to extract the configuration key.

    Args:
        value: The value to parse (e.g., '[In_Config(&quot;MentionPattern&quot;).ToString]')

    Returns:
        The config key if value is an In_Config pattern, None otherwise
    """
    if not value:
        return None
    match = IN_CONFIG_PATTERN.match(value)
    if match:
        return match.group(1)
    return None


def find_config_xlsx(path: Path) -> Optional[Path]:
    """
    Locate a Config.xlsx file.

    Args:
        path: Either the workbook itself or a directory expected to contain Config.xlsx

    Returns:
        Path to the workbook if found, None otherwise
    """
    p = Path(path)
    if p.is_file() and p.suffix.lower() == '.xlsx':
        return p.resolve()

    default_config = p / CONFIG_FILE_NAME
    if p.is_dir() and default_config.is_file():
        return default_config.resolve()

    logger.warning(f"Config.xlsx not found at: {p}")
    return None


def load_config_values(config_file_path: Path) -> Dict[str, str]:
    """
    Read every key/value pair from a Config.xlsx file.

    Keys are taken from the first column and values from the second column of
    every worksheet. Keys are lower-cased; the first occurrence of a key wins.

    Raises:
        ConfigError: If the workbook cannot be read
    """
    try:
        workbook = openpyxl.load_workbook(config_file_path, read_only=True, data_only=True)
    except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError) as e:
        logger.error(f"Error reading Config.xlsx file {config_file_path}: {str(e)}")
        raise ConfigError(f"Cannot read config file {config_file_path}: {e}") from e

    values = {}
    try:
        for sheet_name in workbook.sheetnames:
            worksheet = workbook[sheet_name]
            for row in worksheet.iter_rows(min_col=1, max_col=2, values_only=True):
                if len(row) < 2:
                    continue
                cell_key, cell_value = row[0], row[1]
                if cell_key is None or cell_value is None:
                    continue
                key = str(cell_key).strip().lower()
                if key and key not in values:
                    values[key] = str(cell_value)
    finally:
        workbook.close()

    logger.debug(f"Loaded {len(values)} config values from {config_file_path}")
    return values


def get_config_value(config_file_path: Path, config_key: str) -> Optional[str]:
    """
    Retrieve a value from Config.xlsx file by key.

    Args:
        config_file_path: Path to the Config.xlsx file
        config_key: The configuration key to look up (case-insensitive)

    Returns:
        The configuration value if found, None otherwise
    """
    values = load_config_values(config_file_path)
    value = values.get(config_key.strip().lower())
    if value is None:
        logger.warning(f"Config key '{config_key}' not found in {config_file_path}")
    return value


def resolve_in_config_value(value: str, config_file_path: Optional[Path]) -> str:
    """
    Resolve an In_Config pattern to its actual value from Config.xlsx.

    Values that are not In_Config patterns are returned unchanged.

    Raises:
        ConfigError: If value references a key that cannot be resolved
    """
    config_key = parse_in_config_pattern(value)
    if not config_key:
        return value
    if config_file_path is None:
        raise ConfigError(f"'{value}' references Config.xlsx but no config file was given")

    config_value = get_config_value(config_file_path, config_key)
    if config_value is None:
        raise ConfigError(f"Config key '{config_key}' not found in {config_file_path}")

    logger.info(f"Resolved in_config '{config_key}' to value from {config_file_path}")
    return config_value


def _parse_bool(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in TRUE_VALUES


def load_highlight_settings(config_file_path: Path) -> HighlightSettings:
    """
    Load highlight settings from a Config.xlsx file.

    Recognised keys: Pattern, Foreground, Background, Bright, Dim, IgnoreCase, FixedStrings.
    Missing keys keep their defaults; without Foreground/Background/Bright/Dim the
    default blue background is used.

    Raises:
        ConfigError: If the workbook cannot be read or holds an unknown color name
    """
    values = load_config_values(config_file_path)
    settings = HighlightSettings(
        pattern=values.get('pattern'),
        ignore_case=_parse_bool(values.get('ignorecase')),
        fixed_strings=_parse_bool(values.get('fixedstrings')),
    )

    style_keys = ('foreground', 'background', 'bright', 'dim')
    if any(key in values for key in style_keys):
        try:
            settings.style = Style(
                fg=values.get('foreground') or None,
                bg=values.get('background') or None,
                bright=_parse_bool(values.get('bright')),
                dim=_parse_bool(values.get('dim')),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid style in {config_file_path}: {e}") from e

    logger.info(f"Loaded highlight settings from {config_file_path}")
    return settings
