"""Layout engine for flowing table rows across fixed-size pages."""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from .config import ColumnSpec, LayoutError, ReportConfig
from .page_sink import PageSink
from .styles import FontRole
from .text_wrap import WrapError, truncate_text, wrap_text

__all__ = [
    "CursorState", "LayoutEngine", "LayoutError", "RenderResult",
    "RowPlacement", "WrapError",
]

logger = logging.getLogger(__name__)


@dataclass
class CursorState:
    """Current page and the y coordinate where free space begins."""
    page: int
    y: float  # Top of free space in PDF coordinates


@dataclass
class RowPlacement:
    """Describes where a record's row band was drawn."""
    record_index: int
    page_index: int
    y_top: float
    y_bottom: float
    row_height: float
    line_counts: List[int]


@dataclass
class RenderResult:
    """Outcome of one layout pass."""
    page_count: int
    rows: List[RowPlacement] = field(default_factory=list)
    header_pages: List[int] = field(default_factory=list)

    def rows_on_page(self, page_index: int) -> List[RowPlacement]:
        return [row for row in self.rows if row.page_index == page_index]


class LayoutEngine:
    """
    Places the header band and body rows of a table onto a page sink.

    The engine owns the cursor. Every draw goes through ensure_space first,
    so a band is either drawn whole on the current page or moved to a new
    page, which always starts with the header band.
    """

    def __init__(self, sink: PageSink, config: Optional[ReportConfig] = None):
        self.config = (config or ReportConfig()).validate()
        self.sink = sink
        self.style = sink.style
        self.columns: List[ColumnSpec] = list(self.config.columns)
        self.cursor = CursorState(page=sink.current_page, y=self.config.content_start_y)
        self.rows: List[RowPlacement] = []
        self.header_pages: List[int] = []

    @property
    def remaining_height(self) -> float:
        return self.cursor.y - self.config.margin_bottom

    def can_fit_on_current_page(self, height: float) -> bool:
        """Check if content of given height fits on current page."""
        return (self.cursor.y - height) >= self.config.margin_bottom

    def start_new_page(self) -> int:
        """Move to a new page and return the new page index."""
        page = self.sink.new_page()
        self.cursor = CursorState(page=page, y=self.config.content_start_y)
        logger.debug("Started page %d", page)
        return page

    def ensure_space(self, required_height: float, header: bool = False) -> bool:
        """
        Make sure required_height fits below the cursor.

        Starts a new page when it does not. Unless header is set, the new
        page gets its header band before returning. Returns True if a page
        break happened.

        Raises:
            LayoutError: if the band would not fit even on an empty page.
        """
        limit = self.config.content_height if header else self.config.max_row_height
        if required_height > limit:
            raise LayoutError(
                f"Band of {required_height:.1f}pt cannot fit in {limit:.1f}pt of page space"
            )

        if self.can_fit_on_current_page(required_height):
            return False

        self.start_new_page()
        if not header:
            self.draw_header()
        return True

    def column_positions(self) -> List[float]:
        """Left x coordinate of each column."""
        positions = []
        x = self.config.margin_left
        for column in self.columns:
            positions.append(x)
            x += column.width
        return positions

    def reserve_header_band(self) -> float:
        """
        Make room for the header band without drawing it.

        The header keeps room for one minimum-height row below it, so it
        never sits alone at the foot of a page.
        """
        height = self.config.header_height
        self.ensure_space(height + self.config.min_row_height, header=True)
        return height

    def header_label(self, column: ColumnSpec) -> Tuple[str, float]:
        """Header text and font size, shrunk toward the minimum size before truncating."""
        config = self.config
        usable = config.usable_width(column)
        size = config.header_font_size
        width = self.sink.measure(column.header, FontRole.BOLD, size)
        if width > usable:
            size = max(config.header_min_font_size, math.floor(size * usable / width * 10) / 10)
        label = truncate_text(column.header, usable, self.sink.measure, FontRole.BOLD, size)
        return label, size

    def render_header_band(self) -> None:
        """Draw the header band at the cursor and move below it."""
        config = self.config
        style = self.style
        height = config.header_height
        y_bottom = self.cursor.y - height
        for x, column in zip(self.column_positions(), self.columns):
            self.sink.draw_rect(
                self.cursor.page, x, y_bottom, column.width, height,
                fill_color=style.header_bg_color,
                stroke_color=style.header_border_color,
                stroke_width=style.header_border_width,
            )
            label, size = self.header_label(column)
            if label:
                self.sink.draw_text(
                    self.cursor.page, x + config.cell_padding_x,
                    self.cursor.y - config.header_label_inset - size,
                    label, FontRole.BOLD, size, style.header_text_color,
                    max_width=config.usable_width(column),
                )

        self.cursor.y = y_bottom
        self.header_pages.append(self.cursor.page)

    def draw_header(self) -> None:
        self.reserve_header_band()
        self.render_header_band()

    def cell_text(self, record: Mapping[str, Any], column: ColumnSpec) -> str:
        """Display string for one cell; blank or missing values get the placeholder."""
        value = record.get(column.key)
        if value is None:
            return self.config.placeholder
        text = value if isinstance(value, str) else str(value)
        if not text.strip():
            return self.config.placeholder
        return text

    def measure_row(self, record: Mapping[str, Any]) -> Tuple[List[List[str]], float]:
        """Wrap every cell of a record and compute the shared row height."""
        config = self.config
        cell_lines = [
            wrap_text(
                self.cell_text(record, column),
                config.usable_width(column),
                self.sink.measure,
                FontRole.REGULAR,
                config.font_size,
            )
            for column in self.columns
        ]
        row_height = max(
            [config.min_row_height]
            + [len(lines) * config.line_height + config.row_padding for lines in cell_lines]
        )
        return cell_lines, row_height

    def draw_row(self, record: Mapping[str, Any], record_index: int) -> RowPlacement:
        """Draw one record as a full-height row band and return its placement."""
        config = self.config
        style = self.style
        cell_lines, row_height = self.measure_row(record)

        self.ensure_space(row_height)
        y_top = self.cursor.y
        self.cursor.y -= row_height
        y_bottom = self.cursor.y
        page = self.cursor.page

        fill = style.even_row_color if record_index % 2 == 0 else None
        for x, column, lines in zip(self.column_positions(), self.columns, cell_lines):
            self.sink.draw_rect(
                page, x, y_bottom, column.width, row_height,
                fill_color=fill,
                stroke_color=style.grid_color,
                stroke_width=style.grid_line_width,
            )
            usable = config.usable_width(column)
            for line_index, line in enumerate(lines):
                line_y = (
                    y_top
                    - config.cell_padding_top
                    - config.font_size
                    - line_index * config.line_height
                )
                self.sink.draw_text(
                    page, x + config.cell_padding_x, line_y, line,
                    FontRole.REGULAR, config.font_size, style.body_text_color,
                    max_width=usable,
                )

        placement = RowPlacement(
            record_index=record_index,
            page_index=page,
            y_top=y_top,
            y_bottom=y_bottom,
            row_height=row_height,
            line_counts=[len(lines) for lines in cell_lines],
        )
        self.rows.append(placement)
        return placement

    def draw_title_block(self, title: Optional[str], subtitle: Optional[str] = None) -> None:
        """Draw the document title and an optional wrapped subtitle."""
        config = self.config
        style = self.style
        max_width = config.table_width

        if title:
            self.ensure_space(config.title_advance, header=True)
            text = truncate_text(title, max_width, self.sink.measure, FontRole.BOLD,
                                 config.title_font_size)
            if text:
                self.sink.draw_text(
                    self.cursor.page, config.margin_left, self.cursor.y - config.title_font_size,
                    text, FontRole.BOLD, config.title_font_size, style.body_text_color,
                    max_width=max_width,
                )
            self.cursor.y -= config.title_advance

        if subtitle:
            width = min(config.subtitle_max_width, max_width)
            lines = wrap_text(subtitle, width, self.sink.measure, FontRole.REGULAR,
                              config.subtitle_font_size)
            if not lines:
                return
            step = config.subtitle_font_size + 2
            self.ensure_space(config.subtitle_advance + (len(lines) - 1) * step, header=True)
            for index, line in enumerate(lines):
                self.sink.draw_text(
                    self.cursor.page, config.margin_left,
                    self.cursor.y - config.subtitle_font_size - index * step,
                    line, FontRole.REGULAR, config.subtitle_font_size, style.body_text_color,
                    max_width=width,
                )
            self.cursor.y -= config.subtitle_advance + (len(lines) - 1) * step

    def render(
        self,
        records: Iterable[Mapping[str, Any]],
        title: Optional[str] = None,
        subtitle: Optional[str] = None,
    ) -> RenderResult:
        """Lay out the title block, header band and every record in order."""
        self.draw_title_block(title, subtitle)
        self.draw_header()
        for index, record in enumerate(records):
            self.draw_row(record, index)

        result = RenderResult(
            page_count=self.sink.page_count,
            rows=list(self.rows),
            header_pages=list(self.header_pages),
        )
        logger.info("Laid out %d rows on %d pages", len(result.rows), result.page_count)
        return result
