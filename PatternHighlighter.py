#!/usr/bin/env python3
"""
Pattern Highlighter v1.0 - Terminal Highlighting Tool
Highlights every match of a regular expression in files or standard input.

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

import argparse
import json
import logging
import sys
import importlib.util
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Any, Optional

import colorama

from pattern_highlighter import (
    DEFAULT_HIGHLIGHT_STYLE,
    InvalidPatternError,
    Style,
    compile_pattern,
    highlight_text,
)
from pattern_highlighter.config_helper import (
    ConfigError,
    HighlightSettings,
    find_config_xlsx,
    load_highlight_settings,
    resolve_in_config_value,
)

logger = logging.getLogger(__name__)

DEFAULT_MODULES_DIRECTORY = Path(__file__).parent / 'modules'
STDIN_SOURCE_NAME = '<stdin>'

EXIT_MATCHES_FOUND = 0
EXIT_NO_MATCHES = 1
EXIT_USAGE_ERROR = 2


class PatternHighlighterRunner:
    """Highlights a pattern across several text sources and reports the results."""

    def __init__(self, pattern, style: Style = DEFAULT_HIGHLIGHT_STYLE, color: bool = True,
                 line_numbers: bool = False):
        self.pattern = pattern
        self.style = style
        self.color = color
        self.line_numbers = line_numbers
        self.highlighted = {}
        self.results = {
            'timestamp': datetime.now().isoformat(),
            'pattern': pattern.pattern if hasattr(pattern, 'pattern') else pattern,
            'style': style.to_dict(),
            'total_sources': 0,
            'sources_with_matches': 0,
            'total_matches': 0,
            'sources': {},
            'failed_sources': []
        }

    def highlight_source(self, name: str, text: str) -> Dict[str, Any]:
        """Highlight one text source and record its results."""
        logger.debug(f"Highlighting source: {name}")
        styled = highlight_text(text, self.pattern, self.style)

        source_results = {
            'source': name,
            'line_count': len(styled),
            'match_count': styled.match_count,
            'lines': styled.to_dict()['lines']
        }
        self.highlighted[name] = styled
        self.results['sources'][name] = source_results
        self.results['total_sources'] += 1
        if styled.match_count > 0:
            self.results['sources_with_matches'] += 1
            self.results['total_matches'] += styled.match_count

        return source_results

    def highlight_files(self, paths: List[str]) -> Dict[str, Any]:
        """Highlight every file in paths, in the given order. Unreadable files are logged and skipped."""
        for path in paths:
            file_path = Path(path)
            try:
                with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
                    text = f.read()
            except OSError as e:
                logger.error(f"Error reading file {file_path}: {str(e)}")
                self.results['failed_sources'].append(str(file_path))
                continue
            self.highlight_source(str(file_path), text)

        logger.info(f"Highlighted {self.results['total_matches']} matches in "
                    f"{self.results['sources_with_matches']} of {self.results['total_sources']} sources")
        return self.results

    def generate_report(self, output_file: str = None) -> str:
        """Render every highlighted source, with a header per source when there are several."""
        report_lines = []
        show_headers = len(self.highlighted) > 1

        for name, styled in self.highlighted.items():
            if show_headers:
                report_lines.append(f"==> {name} <==")
            if len(styled) > 0:
                report_lines.append(styled.render(color=self.color, line_numbers=self.line_numbers))

        report = "\n".join(report_lines)

        if output_file:
            with open(output_file, 'w', encoding='utf-8') as f:
                f.write(report + "\n")
            logger.info(f"Report saved to: {output_file}")

        return report

    def export_json(self, output_file: str) -> None:
        """Export results to JSON format."""
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(self.results, f, indent=2, ensure_ascii=False)

        logger.info(f"JSON results saved to: {output_file}")


def load_modules(modules_directory: Path) -> Dict[str, Any]:
    """Load all preset modules from the modules directory, keyed by module name."""
    modules = {}
    modules_directory = Path(modules_directory)

    if not modules_directory.exists():
        logger.warning(f"Modules directory not found: {modules_directory}")
        return modules

    for module_file in sorted(modules_directory.glob("*.py")):
        if module_file.name.startswith("__"):
            continue

        try:
            spec = importlib.util.spec_from_file_location(module_file.stem, module_file)
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
        except Exception as e:
            logger.error(f"Error loading module {module_file.name}: {str(e)}")
            continue

        if hasattr(module, 'highlight') and hasattr(module, 'PATTERN'):
            modules[module_file.stem] = module
            logger.debug(f"Loaded module: {module_file.name}")
        else:
            logger.warning(f"Module {module_file.name} missing 'highlight' function or 'PATTERN'")

    logger.debug(f"Loaded {len(modules)} modules in alphabetical order")
    return modules


def find_module(modules: Dict[str, Any], name: str):
    """Look up a preset by full module name or by its short name (mention -> mention_highlight)."""
    for candidate in (name, f"{name}_highlight"):
        if candidate in modules:
            return modules[candidate]
    raise ConfigError(f"Unknown module '{name}'. Available modules: {', '.join(sorted(modules)) or 'none'}")


def resolve_settings(args: argparse.Namespace, modules: Dict[str, Any]) -> HighlightSettings:
    """
    Combine settings from Config.xlsx, a preset module and command line flags.

    Command line flags win over the preset module, which wins over Config.xlsx.
    """
    config_file = None
    settings = HighlightSettings()
    if args.config:
        config_file = find_config_xlsx(Path(args.config))
        if config_file is None:
            raise ConfigError(f"Config file not found: {args.config}")
        settings = load_highlight_settings(config_file)

    if args.module:
        module = find_module(modules, args.module)
        settings.pattern = module.PATTERN
        settings.style = getattr(module, 'STYLE', settings.style)

    if args.pattern is not None:
        settings.pattern = args.pattern
    if isinstance(settings.pattern, str):
        settings.pattern = resolve_in_config_value(settings.pattern, config_file)
    if args.ignore_case:
        settings.ignore_case = True
    if args.fixed_strings:
        settings.fixed_strings = True

    if args.fg or args.bg or args.bright or args.dim:
        try:
            settings.style = Style(fg=args.fg, bg=args.bg, bright=args.bright, dim=args.dim)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    return settings


def list_modules(modules: Dict[str, Any]) -> str:
    lines = ["Modules Loaded:"]
    for name, module in modules.items():
        desc = getattr(module, 'MODULE_DESCRIPTION', '(No description provided)')
        lines.append(f"  - {name}: {desc}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to run the highlighter."""
    parser = argparse.ArgumentParser(
        description='Pattern Highlighter v1.0 - Terminal Highlighting Tool',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pattern-highlighter -p '@\\w+' chat.log
  cat chat.log | pattern-highlighter -m mention
  pattern-highlighter -p ERROR -i --fg red --bright app.log
  pattern-highlighter -c Config.xlsx -p '[In_Config("Pattern")]' notes.txt --json results.json
        """
    )

    parser.add_argument('files', nargs='*', help='Files to highlight (default: read standard input)')
    parser.add_argument('--pattern', '-p', help='Regular expression to highlight, or an [In_Config("Key")] reference')
    parser.add_argument('--module', '-m', help='Preset module to use (e.g. mention, hashtag, url, email)')
    parser.add_argument('--modules-dir', default=str(DEFAULT_MODULES_DIRECTORY),
                        help='Directory containing preset modules (default: modules next to this script)')
    parser.add_argument('--config', '-c', help='Config.xlsx file, or a directory containing one')
    parser.add_argument('--fg', help='Foreground color for matches (colorama name, e.g. red, lightgreen_ex)')
    parser.add_argument('--bg', help='Background color for matches (default: blue)')
    parser.add_argument('--bright', action='store_true', help='Bright (bold) matches')
    parser.add_argument('--dim', action='store_true', help='Dim matches')
    parser.add_argument('--ignore-case', '-i', action='store_true', help='Match case-insensitively')
    parser.add_argument('--fixed-strings', '-F', action='store_true', help='Treat the pattern as a literal string')
    parser.add_argument('--line-number', '-n', action='store_true', help='Prefix each line with its line number')
    parser.add_argument('--no-color', action='store_true', help='Do not emit color codes')
    parser.add_argument('--output', '-o', help='Output file for the highlighted report (optional)')
    parser.add_argument('--json', '-j', help='Output file for JSON results (optional)')
    parser.add_argument('--list-modules', action='store_true', help='List available preset modules and exit')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    colorama.just_fix_windows_console()
    modules = load_modules(Path(args.modules_dir))

    if args.list_modules:
        print(list_modules(modules))
        return EXIT_MATCHES_FOUND

    try:
        settings = resolve_settings(args, modules)
        if settings.pattern is None:
            parser.error('a pattern is required: use --pattern, --module or a Config.xlsx with a Pattern key')
        pattern = compile_pattern(settings.pattern, settings.ignore_case, settings.fixed_strings)
    except (InvalidPatternError, ConfigError) as e:
        logger.error(f"Highlighting failed: {str(e)}")
        return EXIT_USAGE_ERROR

    runner = PatternHighlighterRunner(pattern, settings.style, color=not args.no_color,
                                      line_numbers=args.line_number)
    try:
        if args.files:
            results = runner.highlight_files(args.files)
        else:
            runner.highlight_source(STDIN_SOURCE_NAME, sys.stdin.read())
            results = runner.results

        report = runner.generate_report(args.output)
        # A lone empty line renders as '' but must still be printed
        if report or any(len(styled) > 0 for styled in runner.highlighted.values()):
            print(report)

        if args.json:
            runner.export_json(args.json)
    except OSError as e:
        logger.error(f"Highlighting failed: {str(e)}")
        return EXIT_NO_MATCHES

    if results['total_matches'] > 0:
        return EXIT_MATCHES_FOUND
    return EXIT_NO_MATCHES


if __name__ == '__main__':
    sys.exit(main())
