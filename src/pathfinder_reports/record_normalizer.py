#!/usr/bin/env python3
"""
RECORD NORMALIZER - Honor labels, time slots and typed registration records

NORMALIZATION STEPS:
1. Strip boilerplate instructions from honor-slot headers
2. Pull the time token out of the header ("9:00 AM") and turn it into a
   minute-of-day ordering key
3. Build a typed RegistrationRecord from a raw row and the column layout
4. Build an attendee schedule: populated honor slots in time order, capped

Malformed time tokens never raise; they simply sort after every valid time.

Priority: HIGH - Shared by every report
Dependencies: pydantic models from data_models
"""

import logging
import re
from typing import Dict, List, Optional

from .config import BOILERPLATE_PHRASES, LUNCH_PREFIX, MAX_SCHEDULE_ITEMS, TIME_PATTERN
from .data_models import Attendee, ColumnLayout, RegistrationRecord, ScheduleItem

logger = logging.getLogger(__name__)

EMPTY_BRACKETS = re.compile(r"\(\s*\)|\[\s*\]")
EDGE_SEPARATORS = re.compile(r"^[\s\-–—:|,;.]+|[\s\-–—:|,;]+$")
WHITESPACE = re.compile(r"\s+")

BOILERPLATE_PATTERNS = [re.compile(re.escape(p), re.IGNORECASE) for p in BOILERPLATE_PHRASES]


def _tidy(text: str) -> str:
    text = EMPTY_BRACKETS.sub("", text)
    text = WHITESPACE.sub(" ", text).strip()
    return EDGE_SEPARATORS.sub("", text)


def clean_column_name(header: str) -> str:
    """Remove instructional boilerplate from a header"""
    cleaned = header or ""
    for pattern in BOILERPLATE_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return _tidy(cleaned)


def extract_time_slot(text: str) -> Optional[str]:
    """
    Find the first time token and normalize it for display

    "9:00am" -> "9:00 AM", "09:30 p.m." -> "9:30 PM", "14:00" -> "14:00"
    """
    match = TIME_PATTERN.search(text or "")
    if not match:
        return None
    hour, minute, marker = match.groups()
    slot = f"{int(hour)}:{minute}"
    if marker:
        slot += f" {marker.upper()}M"
    return slot


def get_time_order(text: str) -> Optional[int]:
    """
    Minute of day for the first time token in text

    Returns None when there is no token or it is out of range, so callers
    can sort it after every valid time.
    """
    match = TIME_PATTERN.search(text or "")
    if not match:
        return None

    hour, minute = int(match.group(1)), int(match.group(2))
    marker = match.group(3)
    if minute > 59:
        return None

    if marker:
        if not 1 <= hour <= 12:
            return None
        hour = hour % 12
        if marker.upper() == "P":
            hour += 12
    elif hour > 23:
        return None

    return hour * 60 + minute


def honor_label(header: str) -> str:
    """Clean header with the time token removed, e.g. 'Honor A'"""
    cleaned = clean_column_name(header)
    return _tidy(TIME_PATTERN.sub("", cleaned, count=1))


def is_lunch_column(header: str) -> bool:
    """Meal columns start with 'lunch', either outright or right after the time"""
    text = (header or "").strip().casefold()
    if text.startswith(LUNCH_PREFIX):
        return True
    return honor_label(header).casefold().startswith(LUNCH_PREFIX)


def build_record(row: Dict[str, str], layout: ColumnLayout, row_number: int) -> RegistrationRecord:
    """Typed record from a parsed row; missing columns become empty strings"""
    known = {
        field: row.get(header, "")
        for field, header in layout.metadata_fields.items()
    }
    honor_values = {slot.header: row.get(slot.header, "") for slot in layout.honor_slots}
    extra = {header: row.get(header, "") for header in layout.ignored_headers}

    return RegistrationRecord(
        row_number=row_number,
        honor_values=honor_values,
        extra=extra,
        **known,
    )


def build_schedule(
    record: RegistrationRecord,
    layout: ColumnLayout,
    max_items: int = MAX_SCHEDULE_ITEMS,
) -> List[ScheduleItem]:
    """Populated honor slots in time order, keeping the earliest max_items"""
    slots = sorted(
        (slot for slot in layout.honor_slots if record.is_signed_up(slot)),
        key=lambda slot: slot.sort_key,
    )

    if len(slots) > max_items:
        logger.debug(
            f"{record.full_name}: {len(slots)} honors selected, keeping first {max_items}"
        )

    return [
        ScheduleItem(
            time=slot.time,
            honor=slot.honor,
            order=slot.order,
            column_index=slot.index,
        )
        for slot in slots[:max_items]
    ]


def build_attendee(
    record: RegistrationRecord,
    group: str,
    layout: Optional[ColumnLayout] = None,
    max_items: int = MAX_SCHEDULE_ITEMS,
) -> Attendee:
    """Attendee view of a record; the schedule is only built when a layout is given"""
    schedule = build_schedule(record, layout, max_items) if layout is not None else []
    return Attendee(
        first_name=record.first_name,
        last_name=record.last_name,
        group=group,
        shirt_size=record.shirt_size,
        schedule=schedule,
    )
