from pathlib import Path

import pytest

from leadsheet.config import (
    DEFAULT_COLUMNS,
    ColumnSpec,
    ConfigurationError,
    ReportConfig,
    load_config,
)
from leadsheet.styles import FontRole, get_style


def test_default_values() -> None:
    cfg = load_config()
    assert (cfg.page_width, cfg.page_height) == (842, 595)
    assert (cfg.margin_top, cfg.margin_bottom) == (70, 40)
    assert cfg.table_width == 800
    assert cfg.content_width == 800
    assert cfg.content_height == 485
    assert cfg.content_start_y == 525
    assert cfg.line_height == cfg.font_size + 2
    assert cfg.placeholder == "N/A"
    assert [c.key for c in cfg.columns] == [
        "Name",
        "Full Address",
        "Business No.",
        "Mobile",
        "Instagram",
        "LinkedIn",
        "Website",
        "Target Area",
    ]


def test_column_spec_is_immutable() -> None:
    with pytest.raises(AttributeError):
        DEFAULT_COLUMNS[0].width = 10


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"page_height": 0}, "Page dimensions"),
        ({"page_width": -5}, "Page dimensions"),
        ({"margin_top": 0}, "margin_top"),
        ({"margin_bottom": -1}, "margin_bottom"),
        ({"margin_right": -1}, "margin_right"),
        ({"font_size": 0}, "font_size"),
        ({"columns": []}, "At least one column"),
        ({"columns": [ColumnSpec("a", "A", 12)]}, "no room"),
        ({"columns": [ColumnSpec("a", "A", 50), ColumnSpec("a", "B", 50)]}, "Duplicate"),
        ({"columns": DEFAULT_COLUMNS + [ColumnSpec("x", "X", 40)]}, "exceeds printable width"),
        ({"header_height": 480}, "no room for a body row"),
        ({"style": "neon"}, "Unknown style"),
    ],
)
def test_validation_errors(overrides: dict, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        ReportConfig(**overrides).validate()


def test_yaml_round_trip(tmp_path: Path) -> None:
    cfg = ReportConfig(
        margin_left=30,
        margin_right=12,
        placeholder="-",
        style="mono",
        columns=[ColumnSpec("Name", "Business", 300), ColumnSpec("Mobile", "Phone", 120)],
    )
    path = tmp_path / "report.yaml"
    cfg.to_yaml(path)

    loaded = load_config(path)
    assert loaded == cfg
    assert loaded.columns[0] == ColumnSpec("Name", "Business", 300.0)


def test_yaml_partial_overrides(tmp_path: Path) -> None:
    path = tmp_path / "report.yaml"
    path.write_text("placeholder: '--'\ncolumns:\n  - key: Name\n    width: 200\n")
    cfg = load_config(path)
    assert cfg.placeholder == "--"
    assert cfg.columns == [ColumnSpec("Name", "Name", 200.0)]
    assert cfg.page_width == 842


def test_yaml_unknown_key(tmp_path: Path) -> None:
    path = tmp_path / "report.yaml"
    path.write_text("orientation: portrait\n")
    with pytest.raises(ConfigurationError, match="orientation"):
        load_config(path)


def test_yaml_bad_column(tmp_path: Path) -> None:
    path = tmp_path / "report.yaml"
    path.write_text("columns:\n  - header: Missing key\n")
    with pytest.raises(ConfigurationError, match="Invalid column"):
        load_config(path)


def test_yaml_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == ReportConfig()


def test_style_lookup() -> None:
    style = get_style("indigo")
    assert style.font_name(FontRole.REGULAR) == "Helvetica"
    assert style.font_name(FontRole.BOLD) == "Helvetica-Bold"
    with pytest.raises(ConfigurationError):
        get_style("missing")


@pytest.mark.parametrize(
    "text, message",
    [
        ("page_width: wide\n", "page_width must be a number"),
        ("font_size: true\n", "font_size must be a number"),
        ("margin_top: [1, 2]\n", "margin_top must be a number"),
        ("line_height: .inf\n", "line_height must be finite"),
        ("placeholder: {a: 1}\n", "placeholder must be a string"),
    ],
)
def test_yaml_wrong_scalar_types(tmp_path: Path, text: str, message: str) -> None:
    path = tmp_path / "report.yaml"
    path.write_text(text)
    with pytest.raises(ConfigurationError, match=message):
        load_config(path)


def test_yaml_numeric_strings_are_coerced(tmp_path: Path) -> None:
    path = tmp_path / "report.yaml"
    path.write_text("margin_left: '30'\nplaceholder: 0\n")
    cfg = load_config(path)
    assert cfg.margin_left == 30.0
    assert cfg.placeholder == "0"
