#!/usr/bin/env python3
"""
CSV PARSER - Registration export text to row records
Quote-aware parsing of Planning Center CSV exports

PARSING RULES:
✅ First line is the header row
✅ Quoted fields may contain commas, doubled quotes and newlines
✅ Headers and values are trimmed; a leading BOM is dropped
✅ Blank lines and all-empty lines produce no record

RECOVERY STRATEGY:
1. Rows with too many fields are cut to the header width
2. Rows with too few fields are padded with empty strings
3. An unterminated quote swallows the rest of the file; that row is dropped
   and every earlier row is kept
4. A file pandas cannot tokenize at all is re-read with quoting off
5. Empty input yields no rows

Priority: CRITICAL - Entry point of every report
Dependencies: pandas
"""

import csv
import io
import logging
from typing import Dict, List

import pandas as pd

logger = logging.getLogger(__name__)


def parse_csv_line(line: str) -> List[str]:
    """Parse a single CSV line into trimmed values"""
    if not line or not line.strip():
        return []
    values = next(csv.reader([line], skipinitialspace=True), [])
    return [value.strip() for value in values]


def parse_csv(text: str) -> List[Dict[str, str]]:
    """
    Parse CSV text into row records

    Args:
        text: Full CSV content, header on the first line

    Returns:
        One dict per non-empty data line, header -> trimmed value
    """
    if text is None:
        return []
    text = text.lstrip("\ufeff")
    if not text.strip():
        return []

    try:
        frame = _read_frame(text, quoting=csv.QUOTE_MINIMAL)
    except (pd.errors.ParserError, csv.Error) as e:
        logger.warning(f"⚠️  CSV structure problem ({e}), retrying without quote handling")
        try:
            frame = _read_frame(text, quoting=csv.QUOTE_NONE)
        except (pd.errors.ParserError, csv.Error) as retry_error:
            logger.error(f"❌ Could not parse CSV: {retry_error}")
            return []
    except pd.errors.EmptyDataError:
        return []

    if frame.empty:
        return []

    headers = [_clean(h) for h in frame.iloc[0]]
    # Blank and repeated headers are dropped; the first occurrence wins
    keep = [i for i, h in enumerate(headers) if h and h not in headers[:i]]

    rows: List[Dict[str, str]] = []
    for values in frame.iloc[1:].itertuples(index=False, name=None):
        record = {headers[i]: _clean(values[i]) for i in keep}
        if not any(record.values()):
            continue
        rows.append(record)

    logger.debug(f"Parsed {len(rows)} rows with {len(keep)} columns")
    return rows


def _read_frame(text: str, quoting: int) -> pd.DataFrame:
    """
    Read every line (header included) as strings

    The header row is read as data so pandas never infers an index column;
    rows longer than the header are cut to its width.
    """
    options = dict(
        header=None,
        dtype=str,
        keep_default_na=False,
        na_filter=False,
        skipinitialspace=True,
        skip_blank_lines=True,
        engine="python",
        quoting=quoting,
    )
    width = pd.read_csv(io.StringIO(text), nrows=1, **options).shape[1]

    def truncate(bad_line: List[str]) -> List[str]:
        logger.debug(f"Truncating row with {len(bad_line)} fields to {width}")
        return bad_line[:width]

    frame = pd.read_csv(io.StringIO(text), on_bad_lines=truncate, **options)
    return frame.fillna("")


def _clean(value) -> str:
    if value is None:
        return ""
    return str(value).strip()
