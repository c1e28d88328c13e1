#!/usr/bin/env python3
"""
Simple wrapper to generate a report without installing the package
Usage: python3 generate_report.py <report> <csv_file> [-o OUTPUT_DIR]
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from pathfinder_reports.cli import main

if __name__ == "__main__":
    sys.exit(main())
