import numpy as np
import pytest

from leadsheet.config import ReportConfig
from leadsheet.layout_engine import LayoutEngine
from leadsheet.lead_generator import generate_leads
from leadsheet.page_sink import RecordingPageSink
from leadsheet.styles import get_style


@pytest.fixture
def config() -> ReportConfig:
    return ReportConfig()


@pytest.fixture
def style():
    return get_style("indigo")


@pytest.fixture
def sink(config, style) -> RecordingPageSink:
    return RecordingPageSink(config.page_width, config.page_height, style)


@pytest.fixture
def engine(sink, config) -> LayoutEngine:
    return LayoutEngine(sink, config)


@pytest.fixture
def measure(sink):
    return sink.measure


@pytest.fixture(scope="session")
def thousand_leads():
    return generate_leads(1000, np.random.default_rng(7))


@pytest.fixture
def mono():
    """Monospaced stand-in: every character is `size` points wide."""
    return lambda text, font_role, size: len(text) * size
