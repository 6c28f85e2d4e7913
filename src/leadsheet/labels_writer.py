"""Write per-row placement labels to JSONL files."""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .config import ReportConfig
from .layout_engine import RenderResult, RowPlacement


def to_top_left_bbox(
    bbox: Tuple[float, float, float, float],
    page_height: float
) -> Tuple[float, float, float, float]:
    """
    Convert a ReportLab bbox to top-left origin coordinates.

    ReportLab: origin at BOTTOM-LEFT, y increases UPWARD
               bbox = [x0, y0, x1, y1] where y0 is bottom, y1 is top

    Top-left:  origin at TOP-LEFT, y increases DOWNWARD
               bbox = [x0, top, x1, bottom] where top < bottom
    """
    x0, y0, x1, y1 = bbox
    return (x0, page_height - y1, x1, page_height - y0)


def row_to_label(
    row: RowPlacement,
    config: ReportConfig,
    doc_id: str,
) -> Dict[str, Any]:
    """Convert a RowPlacement to a JSON-serializable label."""
    x0 = config.margin_left
    bbox = (x0, row.y_bottom, x0 + config.table_width, row.y_top)
    return {
        "row_id": f"{doc_id}__p{row.page_index}_r{row.record_index}",
        "doc_id": doc_id,
        "record_index": row.record_index,
        "page_index": row.page_index,
        "bbox": [round(v, 3) for v in to_top_left_bbox(bbox, config.page_height)],
        "row_height": row.row_height,
        "line_counts": {
            column.key: count for column, count in zip(config.columns, row.line_counts)
        },
    }


def write_row_labels(
    result: RenderResult,
    config: ReportConfig,
    out_path: Path,
    doc_id: str,
) -> Dict[str, int]:
    """
    Write one JSONL line per drawn row, replacing any existing file.

    Returns dict with counts of rows and pages written.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    pages: List[int] = []
    with open(out_path, "w") as f:
        for row in result.rows:
            f.write(json.dumps(row_to_label(row, config, doc_id)) + "\n")
            if not pages or pages[-1] != row.page_index:
                pages.append(row.page_index)

    return {"rows": len(result.rows), "pages": len(pages)}
