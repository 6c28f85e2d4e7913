"""Visual style profiles for rendered lead tables."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict
from reportlab.lib.colors import Color, HexColor, white

from .config import ConfigurationError


class FontRole(Enum):
    """Font roles used by the layout engine."""
    REGULAR = "regular"  # Body cells, subtitle
    BOLD = "bold"        # Header labels, title


@dataclass(frozen=True)
class TableStyle:
    """Fonts and colors for one table look."""
    name: str
    regular_font: str
    bold_font: str
    header_bg_color: Color
    header_border_color: Color
    header_border_width: float
    header_text_color: Color
    body_text_color: Color
    grid_color: Color
    grid_line_width: float
    even_row_color: Color  # Fill for rows 0, 2, 4, ...

    def font_name(self, role: FontRole) -> str:
        """Map a font role to a concrete PDF font name."""
        if role == FontRole.BOLD:
            return self.bold_font
        return self.regular_font


TABLE_STYLES: Dict[str, TableStyle] = {
    "indigo": TableStyle(
        name="indigo",
        regular_font="Helvetica",
        bold_font="Helvetica-Bold",
        header_bg_color=Color(0.16, 0.21, 0.46),
        header_border_color=Color(0.12, 0.16, 0.34),
        header_border_width=0.5,
        header_text_color=white,
        body_text_color=Color(0.12, 0.15, 0.32),
        grid_color=Color(0.73, 0.78, 0.93),
        grid_line_width=0.4,
        even_row_color=Color(0.95, 0.96, 1),
    ),
    "mono": TableStyle(
        name="mono",
        regular_font="Times-Roman",
        bold_font="Times-Bold",
        header_bg_color=HexColor("#D0D0D0"),
        header_border_color=HexColor("#808080"),
        header_border_width=0.75,
        header_text_color=HexColor("#000000"),
        body_text_color=HexColor("#202020"),
        grid_color=HexColor("#CCCCCC"),
        grid_line_width=0.5,
        even_row_color=HexColor("#F2F2F2"),
    ),
}


def get_style(name: str) -> TableStyle:
    """Get a table style by name."""
    try:
        return TABLE_STYLES[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown style {name!r}, expected one of {sorted(TABLE_STYLES)}"
        ) from None
