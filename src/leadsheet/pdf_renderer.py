"""PDF rendering of lead records using ReportLab."""

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Tuple

from .config import ReportConfig
from .layout_engine import LayoutEngine, RenderResult
from .page_sink import CanvasPageSink, PageSink, RecordingPageSink
from .styles import TableStyle, get_style

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Tripura Hospitality Lead Database"
DEFAULT_SUBTITLE = (
    "Client-ready dataset featuring 1,000 hospitality businesses across Tripura, India."
)


class PDFRenderer:
    """Renders record tables to PDF through the layout engine."""

    def __init__(self, config: Optional[ReportConfig] = None, style: Optional[TableStyle] = None):
        self.config = (config or ReportConfig()).validate()
        self.style = style or get_style(self.config.style)

    def _layout(
        self,
        sink: PageSink,
        records: Iterable[Mapping[str, Any]],
        title: Optional[str],
        subtitle: Optional[str],
    ) -> RenderResult:
        engine = LayoutEngine(sink, self.config)
        return engine.render(records, title=title, subtitle=subtitle)

    def render(
        self,
        records: Iterable[Mapping[str, Any]],
        title: Optional[str] = DEFAULT_TITLE,
        subtitle: Optional[str] = DEFAULT_SUBTITLE,
    ) -> Tuple[bytes, RenderResult]:
        """
        Render records to an in-memory PDF.

        Any error raised while laying out aborts the render before the
        document is finalized, so no truncated PDF is ever produced.

        Returns:
            Tuple of (pdf bytes, layout result)
        """
        sink = CanvasPageSink(
            self.config.page_width, self.config.page_height, self.style, title=title
        )
        result = self._layout(sink, records, title, subtitle)
        pdf_bytes = sink.finalize()
        logger.info("Rendered PDF: %d pages, %d bytes", result.page_count, len(pdf_bytes))
        return pdf_bytes, result

    def render_to_file(
        self,
        records: Iterable[Mapping[str, Any]],
        pdf_path: Path,
        title: Optional[str] = DEFAULT_TITLE,
        subtitle: Optional[str] = DEFAULT_SUBTITLE,
    ) -> RenderResult:
        """Render records and write the PDF to pdf_path."""
        pdf_bytes, result = self.render(records, title=title, subtitle=subtitle)
        pdf_path = Path(pdf_path)
        pdf_path.parent.mkdir(parents=True, exist_ok=True)
        pdf_path.write_bytes(pdf_bytes)
        return result

    def dry_run(
        self,
        records: Iterable[Mapping[str, Any]],
        title: Optional[str] = DEFAULT_TITLE,
        subtitle: Optional[str] = DEFAULT_SUBTITLE,
    ) -> Tuple[RecordingPageSink, RenderResult]:
        """Lay out records onto a recording sink without producing a PDF."""
        sink = RecordingPageSink(self.config.page_width, self.config.page_height, self.style)
        result = self._layout(sink, records, title, subtitle)
        return sink, result
