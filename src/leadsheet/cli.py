"""Command-line interface for the lead sheet renderer."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional
import numpy as np
import yaml

from .config import ConfigurationError, LayoutError, ReportConfig, load_config
from .labels_writer import write_row_labels
from .lead_generator import generate_leads
from .pdf_renderer import DEFAULT_SUBTITLE, DEFAULT_TITLE, PDFRenderer
from .styles import TABLE_STYLES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="leadsheet",
        description="Render synthetic hospitality leads into a paginated PDF table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("out/tripura-hospitality-leads.pdf"),
        help="Output PDF path",
    )
    parser.add_argument(
        "--num-records",
        type=int,
        default=1000,
        help="Number of lead records to generate",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for record generation",
    )
    parser.add_argument(
        "--style",
        choices=sorted(TABLE_STYLES),
        help="Table style (overrides config)",
    )
    parser.add_argument(
        "--title",
        default=DEFAULT_TITLE,
        help="Document title; pass an empty string to omit it",
    )
    parser.add_argument(
        "--subtitle",
        default=DEFAULT_SUBTITLE,
        help="Line under the title; pass an empty string to omit it",
    )
    parser.add_argument(
        "--labels",
        type=Path,
        help="Also write row placements to this JSONL file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Lay out the document without writing a PDF",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log page breaks and render details",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.num_records < 0:
        print("error: --num-records must not be negative", file=sys.stderr)
        return 2

    try:
        config = load_config(args.config) if args.config else ReportConfig()
        # Override with CLI args
        if args.style:
            config.style = args.style
        renderer = PDFRenderer(config)
    except (ConfigurationError, OSError, yaml.YAMLError) as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return 2

    rng = np.random.default_rng(args.seed)
    records = generate_leads(args.num_records, rng)
    print(f"Generated {len(records)} records (seed {args.seed})")

    title = args.title or None
    subtitle = args.subtitle or None
    try:
        if args.dry_run:
            _, result = renderer.dry_run(records, title=title, subtitle=subtitle)
        else:
            result = renderer.render_to_file(records, args.out, title=title, subtitle=subtitle)
    except LayoutError as exc:
        print(f"layout error: {exc}", file=sys.stderr)
        return 1

    doc_id = args.out.stem
    if args.labels:
        counts = write_row_labels(result, renderer.config, args.labels, doc_id)
        print(f"  Labels: {counts['rows']} rows -> {args.labels}")

    print("\nRender complete!" if not args.dry_run else "\nDry run complete!")
    print(f"  Pages: {result.page_count}")
    print(f"  Rows: {len(result.rows)}")
    if not args.dry_run:
        print(f"  Output: {args.out}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
