#!/usr/bin/env python3
"""
Command-line entry point
Usage: pathfinder-reports <report> <csv_file> [-o OUTPUT_DIR] [--date YYYY-MM-DD]
       pathfinder-reports index [-o OUTPUT_DIR]
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .config import DEFAULT_WRITE_IN_ROWS, ReportSettings
from .data_models import ReportType
from .data_processor import ReportDataProcessor
from .report_generator import ReportGenerator

logger = logging.getLogger(__name__)

INDEX_COMMAND = "index"


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got '{value}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathfinder-reports",
        description="Generate printable Pathfinder reports from a registration CSV export.",
    )
    parser.add_argument(
        "report",
        choices=[r.value for r in ReportType] + [INDEX_COMMAND],
        help="Report to generate, or 'index' for the report overview page",
    )
    parser.add_argument("csv_file", nargs="?", type=Path, help="Planning Center CSV export")
    parser.add_argument("-o", "--output-dir", type=Path, default=Path("output"), help="Output directory")
    parser.add_argument("--date", type=_parse_date, default=None, help="Print date (default: today)")
    parser.add_argument(
        "--write-in-rows", type=int, default=DEFAULT_WRITE_IN_ROWS, help="Blank rows per sheet"
    )
    parser.add_argument("--no-shirt", action="store_true", help="Leave out the shirt checkbox column")
    parser.add_argument(
        "--pdf", action=argparse.BooleanOptionalAction, default=True,
        help="Also write a PDF (needs WeasyPrint)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings_kwargs = {
        "output_dir": args.output_dir,
        "write_in_rows": args.write_in_rows,
        "show_shirt_checkbox": not args.no_shirt,
    }
    if args.date is not None:
        settings_kwargs["print_date"] = args.date
    try:
        settings = ReportSettings(**settings_kwargs)
    except ValidationError as e:
        parser.error(str(e))

    generator = ReportGenerator(settings)

    if args.report == INDEX_COMMAND:
        generator.write_index()
        return 0

    if args.csv_file is None:
        parser.error(f"a CSV file is required for the '{args.report}' report")

    processor = ReportDataProcessor()
    try:
        session = processor.load_file(args.csv_file)
    except (FileNotFoundError, ValueError, OSError) as e:
        logger.error(f"❌ {e}")
        return 1

    written = generator.write_report(args.report, session, pdf=args.pdf)
    for path in written:
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
