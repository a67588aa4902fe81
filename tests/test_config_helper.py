import openpyxl
import pytest

from pattern_highlighter import Style
from pattern_highlighter.config_helper import (
    ConfigError,
    HighlightSettings,
    find_config_xlsx,
    get_config_value,
    load_config_values,
    load_highlight_settings,
    parse_in_config_pattern,
    resolve_in_config_value,
)


def write_config(path, rows, extra_sheet_rows=None):
    workbook = openpyxl.Workbook()
    worksheet = workbook.active
    worksheet.title = "Settings"
    for row in rows:
        worksheet.append(list(row))
    if extra_sheet_rows:
        extra = workbook.create_sheet("Extra")
        for row in extra_sheet_rows:
            extra.append(list(row))
    workbook.save(path)
    return path


@pytest.mark.parametrize(
    "value, expected",
    [
        ('[In_Config("MentionPattern")]', "MentionPattern"),
        ('[In_Config("MentionPattern").ToString]', "MentionPattern"),
        ("[in_config(&quot;Pattern&quot;).ToString]", "Pattern"),
        (r"@\w+", None),
        ("", None),
        ('prefix [In_Config("Pattern")]', None),
    ],
)
def test_parse_in_config_pattern(value, expected):
    assert parse_in_config_pattern(value) == expected


def test_find_config_xlsx(tmp_path):
    config = write_config(tmp_path / "Config.xlsx", [("Pattern", "@\\w+")])

    assert find_config_xlsx(tmp_path) == config.resolve()
    assert find_config_xlsx(config) == config.resolve()
    assert find_config_xlsx(tmp_path / "missing") is None


def test_load_config_values_reads_all_sheets(tmp_path):
    config = write_config(
        tmp_path / "Config.xlsx",
        [("Name", "Value"), ("Pattern", "@\\w+"), ("Empty", None)],
        extra_sheet_rows=[("Background", "red"), ("Pattern", "ignored")],
    )

    values = load_config_values(config)

    assert values["pattern"] == "@\\w+"
    assert values["background"] == "red"
    assert "empty" not in values


def test_get_config_value_is_case_insensitive(tmp_path):
    config = write_config(tmp_path / "Config.xlsx", [("MentionPattern", "@\\w+")])

    assert get_config_value(config, "mentionpattern") == "@\\w+"
    assert get_config_value(config, "Missing") is None


def test_load_config_values_unreadable_file(tmp_path):
    bogus = tmp_path / "Config.xlsx"
    bogus.write_text("not a workbook")

    with pytest.raises(ConfigError):
        load_config_values(bogus)


def test_resolve_in_config_value(tmp_path):
    config = write_config(tmp_path / "Config.xlsx", [("MentionPattern", "@\\w+")])

    assert resolve_in_config_value('[In_Config("MentionPattern")]', config) == "@\\w+"
    assert resolve_in_config_value("#\\w+", config) == "#\\w+"
    assert resolve_in_config_value("#\\w+", None) == "#\\w+"


def test_resolve_in_config_value_missing_key(tmp_path):
    config = write_config(tmp_path / "Config.xlsx", [("Other", "x")])

    with pytest.raises(ConfigError, match="MentionPattern"):
        resolve_in_config_value('[In_Config("MentionPattern")]', config)

    with pytest.raises(ConfigError):
        resolve_in_config_value('[In_Config("MentionPattern")]', None)


def test_load_highlight_settings(tmp_path):
    config = write_config(
        tmp_path / "Config.xlsx",
        [
            ("Pattern", "error"),
            ("Foreground", "red"),
            ("Bright", "yes"),
            ("IgnoreCase", True),
            ("FixedStrings", "no"),
        ],
    )

    settings = load_highlight_settings(config)

    assert settings == HighlightSettings(
        pattern="error",
        style=Style(fg="RED", bright=True),
        ignore_case=True,
        fixed_strings=False,
    )


def test_load_highlight_settings_defaults(tmp_path):
    config = write_config(tmp_path / "Config.xlsx", [("Unrelated", "value")])

    assert load_highlight_settings(config) == HighlightSettings()


def test_load_highlight_settings_bad_color(tmp_path):
    config = write_config(tmp_path / "Config.xlsx", [("Background", "plaid")])

    with pytest.raises(ConfigError, match="plaid"):
        load_highlight_settings(config)
