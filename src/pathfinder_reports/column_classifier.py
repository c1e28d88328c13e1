#!/usr/bin/env python3
"""
COLUMN CLASSIFIER - Sort CSV headers into metadata, honor slots and ignored

CLASSIFICATION RULES (header text only, never row content):
1. Known metadata header (First Name, Last Name, Club, ...) -> metadata
2. Contains a time token, is not a lunch column and still has a label once
   the time and boilerplate are removed -> honor slot
3. Anything else -> ignored (kept in the record's residual mapping)

Priority: HIGH - Decides what every report shows
Dependencies: config tables, record_normalizer text helpers
"""

import logging
from typing import Dict, List, Optional, Sequence

from .config import METADATA_COLUMNS, TIME_PATTERN
from .data_models import ClassifiedColumn, ColumnKind, ColumnLayout, HonorSlot
from .record_normalizer import extract_time_slot, get_time_order, honor_label, is_lunch_column

logger = logging.getLogger(__name__)


def _build_alias_index() -> Dict[str, str]:
    index = {}
    for field, aliases in METADATA_COLUMNS.items():
        for alias in aliases:
            index[alias.casefold()] = field
    return index


METADATA_ALIASES = _build_alias_index()


def metadata_field(header: str) -> Optional[str]:
    """Canonical field name for a metadata header, or None"""
    key = " ".join((header or "").casefold().split())
    return METADATA_ALIASES.get(key)


def is_honor_column(header: str) -> bool:
    """True for time-slot honor columns"""
    if not header or metadata_field(header):
        return False
    if not TIME_PATTERN.search(header):
        return False
    if is_lunch_column(header):
        return False
    # A bare time ("9:00 AM") carries no honor
    return bool(honor_label(header))


def classify_header(header: str, index: int) -> ClassifiedColumn:
    field = metadata_field(header)
    if field:
        return ClassifiedColumn(header=header, index=index, kind=ColumnKind.METADATA, field=field)
    if is_honor_column(header):
        return ClassifiedColumn(header=header, index=index, kind=ColumnKind.HONOR_SLOT)
    return ClassifiedColumn(header=header, index=index, kind=ColumnKind.IGNORED)


def classify_columns(headers: Sequence[str]) -> ColumnLayout:
    """
    Classify a header row

    Args:
        headers: Header names in file order

    Returns:
        ColumnLayout with every column and the honor slots sorted by time
    """
    columns: List[ClassifiedColumn] = [
        classify_header(header, index) for index, header in enumerate(headers)
    ]

    slots = [
        HonorSlot(
            header=column.header,
            index=column.index,
            time=extract_time_slot(column.header) or "",
            honor=honor_label(column.header),
            order=get_time_order(column.header),
        )
        for column in columns
        if column.kind == ColumnKind.HONOR_SLOT
    ]
    slots.sort(key=lambda slot: slot.sort_key)

    malformed = [slot.header for slot in slots if slot.order is None]
    if malformed:
        logger.warning(f"⚠️  Honor columns with unreadable times (listed last): {malformed}")

    layout = ColumnLayout(columns=columns, honor_slots=slots)
    logger.info(
        f"  📋 Columns: {len(layout.metadata_fields)} metadata, "
        f"{len(slots)} honor slots, {len(layout.ignored_headers)} ignored"
    )
    return layout
