#!/usr/bin/env python3
"""
DATA PROCESSOR - CSV loading, validation, and registration record assembly
Turn one Planning Center export into a ReportSession

PROCESSING PIPELINE:
1. Read the file (UTF-8, BOM tolerant)
2. Parse rows (quote-aware, best-effort recovery)
3. Classify columns once for the whole file
4. Build typed registration records, skipping rows without a name
5. Record validation warnings (missing columns, unreadable times)

SESSION HANDLING:
- Each load builds a brand new ReportSession and swaps it in whole
- reset() drops the current session
- Sessions are frozen; nothing downstream mutates them

Priority: CRITICAL - Foundation for all report generation
Dependencies: pandas (via csv_parser), pydantic models
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .column_classifier import classify_columns
from .csv_parser import parse_csv, parse_csv_line
from .data_models import ColumnLayout, RegistrationRecord, ReportSession
from .record_normalizer import build_record

logger = logging.getLogger(__name__)

CSV_SUFFIX = ".csv"
GROUPING_FIELDS = ("assignment_area", "grade", "club", "group")


class ReportDataProcessor:
    """Load and validate a registration export for report generation"""

    def __init__(self):
        self.session: Optional[ReportSession] = None

    def load_file(self, file_path: Path) -> ReportSession:
        """
        Load a CSV export from disk

        Args:
            file_path: Path to a .csv file

        Returns:
            The new current ReportSession
        """
        file_path = Path(file_path)
        if file_path.suffix.lower() != CSV_SUFFIX:
            raise ValueError(f"Expected a .csv file, got: {file_path.name}")
        if not file_path.exists():
            raise FileNotFoundError(f"CSV file not found: {file_path}")

        logger.info(f"📊 Loading registrations from: {file_path}")
        text = file_path.read_text(encoding="utf-8-sig", errors="replace")
        return self.load_text(text, source_name=file_path.name)

    def load_text(self, text: str, source_name: str = "upload.csv") -> ReportSession:
        """Parse CSV text and replace the current session"""
        rows = parse_csv(text)
        headers = list(rows[0].keys()) if rows else _header_only(text)
        layout = classify_columns(headers)

        warnings: List[str] = []
        warnings.extend(self._check_columns(layout))

        # Without any name column every row is kept with blank names
        has_name_column = layout.has_field("first_name") or layout.has_field("last_name")

        records: List[RegistrationRecord] = []
        for row_number, row in enumerate(rows, start=1):
            record = build_record(row, layout, row_number)
            if has_name_column and not record.has_name:
                warnings.append(f"Row {row_number}: no first or last name, skipped")
                continue
            records.append(record)

        for warning in warnings:
            logger.warning(f"  ⚠️  {warning}")

        session = ReportSession(
            source_name=source_name,
            layout=layout,
            records=records,
            warnings=warnings,
        )
        self.session = session

        logger.info(f"  ✅ Loaded {len(records)} registrations from {source_name}")
        return session

    def reset(self) -> None:
        """Forget the currently loaded file"""
        if self.session is not None:
            logger.info(f"🔄 Clearing {self.session.source_name}")
        self.session = None

    def require_session(self) -> ReportSession:
        if self.session is None:
            raise ValueError("No CSV file loaded")
        return self.session

    def missing_fields(self, fields: Iterable[str]) -> List[str]:
        """Metadata fields that the loaded file does not provide"""
        layout = self.require_session().layout
        return [f for f in fields if not layout.has_field(f)]

    def _check_columns(self, layout: ColumnLayout) -> List[str]:
        warnings = []
        for field in ("first_name", "last_name"):
            if not layout.has_field(field):
                warnings.append(f"Missing column for {field.replace('_', ' ')}; names will be blank")
        if not any(layout.has_field(f) for f in GROUPING_FIELDS):
            warnings.append("No Club, Grade or Assignment Area column; groups will be blank")
        return warnings

    def generate_validation_report(self) -> str:
        """Human-readable summary of the loaded file"""
        if self.session is None:
            return "No CSV file loaded"

        session = self.session
        lines = [
            f"📋 VALIDATION REPORT: {session.source_name}",
            "=" * 60,
            f"Registrations: {session.record_count}",
            f"Metadata columns: {', '.join(sorted(session.layout.metadata_fields)) or 'none'}",
            f"Honor slots: {len(session.layout.honor_slots)}",
        ]
        for slot in session.layout.honor_slots:
            lines.append(f"  - {slot.title}")
        if session.warnings:
            lines.append(f"Warnings ({len(session.warnings)}):")
            lines.extend(f"  ⚠️  {w}" for w in session.warnings)
        else:
            lines.append("✅ No warnings")
        return "\n".join(lines)


def _header_only(text: str) -> List[str]:
    """Headers of a file that has no data rows"""
    lines = (text or "").lstrip("\ufeff").splitlines()
    first_line = next((line for line in lines if line.strip()), "")
    return parse_csv_line(first_line)
