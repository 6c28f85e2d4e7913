"""Drawing surfaces the layout engine renders onto."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional

from reportlab.lib.colors import Color
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from .config import LayoutError
from .styles import FontRole, TableStyle

# Slack for float error when checking text against its box
WIDTH_TOLERANCE = 1e-6


class PageSink(ABC):
    """
    A fixed page-size drawing surface.

    The first page exists as soon as the sink is created (page handle 0).
    Coordinates are PDF points with the origin at the bottom-left corner.
    """

    def __init__(self, page_width: float, page_height: float, style: TableStyle):
        self.page_width = page_width
        self.page_height = page_height
        self.style = style
        self.current_page = 0

    @property
    def page_count(self) -> int:
        return self.current_page + 1

    def measure(self, text: str, font_role: FontRole, size: float) -> float:
        """Rendered width of text in points."""
        return stringWidth(text, self.style.font_name(font_role), size)

    def new_page(self) -> int:
        """Start a new page and return its handle."""
        self._begin_page()
        self.current_page += 1
        return self.current_page

    def _check_page(self, page: int) -> None:
        if page != self.current_page:
            raise LayoutError(
                f"Cannot draw on page {page}, current page is {self.current_page}"
            )

    def _check_width(self, text: str, font_role: FontRole, size: float,
                     max_width: Optional[float]) -> None:
        if max_width is None:
            return
        width = self.measure(text, font_role, size)
        if width > max_width + WIDTH_TOLERANCE:
            raise LayoutError(
                f"Text {text!r} is {width:.2f}pt wide, exceeding its {max_width:.2f}pt box"
            )

    @abstractmethod
    def _begin_page(self) -> None:
        """Backend hook run when a new page starts."""

    @abstractmethod
    def draw_rect(
        self,
        page: int,
        x: float,
        y: float,
        width: float,
        height: float,
        fill_color: Optional[Color] = None,
        stroke_color: Optional[Color] = None,
        stroke_width: float = 0,
    ) -> None:
        """Draw a rectangle whose bottom-left corner is (x, y)."""

    @abstractmethod
    def draw_text(
        self,
        page: int,
        x: float,
        y: float,
        text: str,
        font_role: FontRole,
        size: float,
        color: Color,
        max_width: Optional[float] = None,
    ) -> None:
        """Draw a single line of text with its baseline starting at (x, y)."""

    @abstractmethod
    def finalize(self) -> bytes:
        """Finish the document and return its bytes."""


class CanvasPageSink(PageSink):
    """Page sink backed by a ReportLab canvas writing to memory."""

    def __init__(self, page_width: float, page_height: float, style: TableStyle,
                 title: Optional[str] = None):
        super().__init__(page_width, page_height, style)
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=(page_width, page_height))
        if title:
            self._canvas.setTitle(title)
        self._finalized = False

    def _begin_page(self) -> None:
        self._canvas.showPage()

    def draw_rect(self, page, x, y, width, height,
                  fill_color=None, stroke_color=None, stroke_width=0):
        self._check_page(page)
        c = self._canvas
        if fill_color is not None:
            c.setFillColor(fill_color)
        stroke = stroke_color is not None and stroke_width > 0
        if stroke:
            c.setStrokeColor(stroke_color)
            c.setLineWidth(stroke_width)
        c.rect(x, y, width, height, fill=fill_color is not None, stroke=stroke)

    def draw_text(self, page, x, y, text, font_role, size, color, max_width=None):
        self._check_page(page)
        self._check_width(text, font_role, size, max_width)
        c = self._canvas
        c.setFont(self.style.font_name(font_role), size)
        c.setFillColor(color)
        c.drawString(x, y, text)

    def finalize(self) -> bytes:
        if not self._finalized:
            self._canvas.save()
            self._finalized = True
        return self._buffer.getvalue()


@dataclass
class DrawOp:
    """One recorded drawing primitive."""
    kind: str  # "rect" or "text"
    page: int
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0
    text: Optional[str] = None
    font_role: Optional[FontRole] = None
    size: Optional[float] = None
    fill_color: Optional[Color] = None


class RecordingPageSink(PageSink):
    """Page sink that keeps draw calls in memory instead of producing a PDF."""

    def __init__(self, page_width: float, page_height: float, style: TableStyle):
        super().__init__(page_width, page_height, style)
        self.ops: List[DrawOp] = []

    def _begin_page(self) -> None:
        pass

    def draw_rect(self, page, x, y, width, height,
                  fill_color=None, stroke_color=None, stroke_width=0):
        self._check_page(page)
        self.ops.append(DrawOp(
            kind="rect", page=page, x=x, y=y, width=width, height=height,
            fill_color=fill_color,
        ))

    def draw_text(self, page, x, y, text, font_role, size, color, max_width=None):
        self._check_page(page)
        self._check_width(text, font_role, size, max_width)
        self.ops.append(DrawOp(
            kind="text", page=page, x=x, y=y,
            width=self.measure(text, font_role, size),
            text=text, font_role=font_role, size=size,
        ))

    def texts(self, page: Optional[int] = None) -> List[str]:
        """Text runs drawn so far, optionally limited to one page."""
        return [
            op.text for op in self.ops
            if op.kind == "text" and (page is None or op.page == page)
        ]

    def finalize(self) -> bytes:
        return b""
