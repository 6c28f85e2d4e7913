import re
from pathlib import Path

import numpy as np
import pytest

from leadsheet.config import ColumnSpec, ReportConfig
from leadsheet.lead_generator import generate_leads
from leadsheet.pdf_renderer import DEFAULT_TITLE, PDFRenderer
from leadsheet.text_wrap import WrapError


def count_pages(pdf_bytes: bytes) -> int:
    return len(re.findall(rb"/Type\s*/Page(?!s)", pdf_bytes))


def test_render_returns_pdf_bytes() -> None:
    leads = generate_leads(40, np.random.default_rng(3))
    pdf_bytes, result = PDFRenderer().render(leads)
    assert pdf_bytes.startswith(b"%PDF")
    assert pdf_bytes.rstrip().endswith(b"%%EOF")
    assert len(result.rows) == 40
    assert count_pages(pdf_bytes) == result.page_count


def test_render_multi_page_document(thousand_leads) -> None:
    pdf_bytes, result = PDFRenderer().render(thousand_leads)
    assert result.page_count >= 3
    assert count_pages(pdf_bytes) == result.page_count


def test_dry_run_matches_real_render() -> None:
    leads = generate_leads(300, np.random.default_rng(5))
    renderer = PDFRenderer()
    _, real = renderer.render(leads)
    _, dry = renderer.dry_run(leads)
    assert real.page_count == dry.page_count
    assert real.rows == dry.rows


def test_render_to_file(tmp_path: Path) -> None:
    leads = generate_leads(25, np.random.default_rng(1))
    out = tmp_path / "nested" / "leads.pdf"
    result = PDFRenderer(ReportConfig(style="mono")).render_to_file(leads, out, title="Leads")
    assert out.read_bytes().startswith(b"%PDF")
    assert len(result.rows) == 25


def test_render_without_title_block() -> None:
    leads = generate_leads(5, np.random.default_rng(2))
    sink, result = PDFRenderer().dry_run(leads, title=None, subtitle=None)
    assert DEFAULT_TITLE not in sink.texts()
    assert result.rows[0].y_top == ReportConfig().content_start_y - ReportConfig().header_height


def test_failed_render_writes_nothing(tmp_path: Path) -> None:
    # 2pt of usable width cannot hold a single glyph at 9pt
    config = ReportConfig(columns=[ColumnSpec("Name", "N", 14)])
    out = tmp_path / "broken.pdf"
    with pytest.raises(WrapError):
        PDFRenderer(config).render_to_file([{"Name": "Hotel"}], out, title=None, subtitle=None)
    assert not out.exists()
