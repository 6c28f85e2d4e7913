"""Configuration dataclasses and YAML loading for the lead sheet renderer."""

import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Optional
import yaml
from reportlab.lib.pagesizes import A4, landscape


# A4 landscape, 842 x 595 points
PAGE_SIZE = landscape(A4)
DEFAULT_PLACEHOLDER = "N/A"


class ConfigurationError(ValueError):
    """Raised when layout configuration cannot produce a valid document."""


class LayoutError(RuntimeError):
    """Raised when content cannot be placed inside the printable area."""


@dataclass(frozen=True)
class ColumnSpec:
    """A fixed-width table column."""
    key: str  # Record field the column reads
    header: str  # Header label
    width: float  # Width in points


# Lead schema, widths sum to 800pt
DEFAULT_COLUMNS: List[ColumnSpec] = [
    ColumnSpec("Name", "Name", 80),
    ColumnSpec("Full Address", "Full Address", 235),
    ColumnSpec("Business No.", "Business No.", 70),
    ColumnSpec("Mobile", "Mobile", 75),
    ColumnSpec("Instagram", "Instagram", 95),
    ColumnSpec("LinkedIn", "LinkedIn", 100),
    ColumnSpec("Website", "Website", 90),
    ColumnSpec("Target Area", "Target Area", 55),
]


@dataclass
class ReportConfig:
    """Page geometry, typography and table metrics for one render."""

    page_width: float = round(PAGE_SIZE[0])
    page_height: float = round(PAGE_SIZE[1])
    margin_top: float = 70
    margin_bottom: float = 40
    margin_left: float = 21
    margin_right: float = 21

    # Body text
    font_size: float = 9
    line_height: float = 11  # font_size + 2
    min_row_height: float = 24
    cell_padding_x: float = 6  # Applied on both sides of a cell
    cell_padding_top: float = 6  # Gap between row top and first line box
    row_padding: float = 8  # Added to the wrapped text height of a cell

    # Header band
    header_height: float = 28
    header_font_size: float = 10
    header_min_font_size: float = 6  # Labels shrink down to this before truncating
    header_label_inset: float = 12

    # Title block on the first page
    title_font_size: float = 20
    title_advance: float = 26
    subtitle_font_size: float = 11
    subtitle_advance: float = 30
    subtitle_max_width: float = 520

    placeholder: str = DEFAULT_PLACEHOLDER
    style: str = "indigo"
    columns: List[ColumnSpec] = field(default_factory=lambda: list(DEFAULT_COLUMNS))

    @property
    def table_width(self) -> float:
        return sum(column.width for column in self.columns)

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def content_height(self) -> float:
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def content_start_y(self) -> float:
        """Top of content area (PDF coordinates start at bottom)."""
        return self.page_height - self.margin_top

    @property
    def max_row_height(self) -> float:
        """Tallest body row that fits under the header on an empty page."""
        return self.content_height - self.header_height

    def usable_width(self, column: ColumnSpec) -> float:
        """Width available to wrapped text inside a column."""
        return column.width - 2 * self.cell_padding_x

    def validate(self) -> "ReportConfig":
        """Check geometry and raise ConfigurationError on the first problem."""
        # Imported here to avoid a cycle with styles -> config
        from .styles import TABLE_STYLES

        if self.page_width <= 0 or self.page_height <= 0:
            raise ConfigurationError(
                f"Page dimensions must be positive, got {self.page_width}x{self.page_height}"
            )
        for name in ("margin_top", "margin_bottom", "margin_left"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        if self.margin_right < 0:
            raise ConfigurationError(f"margin_right must not be negative, got {self.margin_right}")
        if self.content_height <= 0 or self.content_width <= 0:
            raise ConfigurationError("Margins leave no printable area on the page")

        for name in ("font_size", "line_height", "header_font_size", "header_min_font_size",
                     "header_height", "title_font_size", "subtitle_font_size"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        if self.cell_padding_x < 0 or self.cell_padding_top < 0 or self.row_padding < 0:
            raise ConfigurationError("Cell padding must not be negative")

        if not self.columns:
            raise ConfigurationError("At least one column is required")
        seen = set()
        for column in self.columns:
            if column.key in seen:
                raise ConfigurationError(f"Duplicate column key: {column.key!r}")
            seen.add(column.key)
            if self.usable_width(column) <= 0:
                raise ConfigurationError(
                    f"Column {column.key!r} is {column.width}pt wide, which leaves no room "
                    f"inside {self.cell_padding_x}pt padding on each side"
                )
        if self.table_width > self.content_width:
            raise ConfigurationError(
                f"Table width {self.table_width}pt exceeds printable width {self.content_width}pt"
            )

        if self.max_row_height < max(self.min_row_height, self.line_height + self.row_padding):
            raise ConfigurationError(
                f"Header band of {self.header_height}pt leaves no room for a body row "
                f"in {self.content_height}pt of printable height"
            )
        if self.style not in TABLE_STYLES:
            raise ConfigurationError(
                f"Unknown style {self.style!r}, expected one of {sorted(TABLE_STYLES)}"
            )
        return self

    @classmethod
    def from_dict(cls, data: Dict) -> "ReportConfig":
        """Build a config from plain data, as loaded from YAML."""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

        # Convert column mappings to ColumnSpec
        if "columns" in data:
            try:
                data["columns"] = [
                    ColumnSpec(
                        key=str(col["key"]),
                        header=str(col.get("header", col["key"])),
                        width=float(col["width"]),
                    )
                    for col in data["columns"]
                ]
            except (KeyError, TypeError, ValueError) as exc:
                raise ConfigurationError(f"Invalid column definition: {exc}") from exc

        # YAML scalars arrive untyped, coerce them to the field types
        for f in fields(cls):
            if f.name not in data or f.type not in (float, str):
                continue
            value = data[f.name]
            if f.type is str:
                if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                    raise ConfigurationError(f"{f.name} must be a string, got {value!r}")
                data[f.name] = str(value)
                continue
            if isinstance(value, bool):
                raise ConfigurationError(f"{f.name} must be a number, got {value!r}")
            try:
                number = float(value)
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(f"{f.name} must be a number, got {value!r}") from exc
            if not math.isfinite(number):
                raise ConfigurationError(f"{f.name} must be finite, got {value!r}")
            data[f.name] = number

        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path) -> "ReportConfig":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        if data is not None and not isinstance(data, dict):
            raise ConfigurationError(f"{path}: expected a mapping at the top level")
        return cls.from_dict(data)

    def to_dict(self) -> Dict:
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "columns"}
        data["columns"] = [
            {"key": col.key, "header": col.header, "width": col.width}
            for col in self.columns
        ]
        return data

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def load_config(path: Optional[Path] = None) -> ReportConfig:
    """Load config from path or return default config, validated."""
    if path is None:
        return ReportConfig().validate()
    return ReportConfig.from_yaml(path).validate()
