#!/usr/bin/env python3
"""
GROUPING & SORT ENGINE - Partition attendees into ordered page groups

ORDERING METHODOLOGY:
✅ Groups: rank from the grade / Pathfinder class table, unknown groups last,
   ties keep the order the group first appeared in the file
✅ Members: first name, then last name, case- and accent-insensitive
✅ Empty groups are dropped before rendering
✅ Same input -> same output; file order is only the last tiebreaker

REPORT BUILDERS:
- Attendance sheets: grouped by assignment area (falls back to grade, club)
- Honor day: one group per honor slot, in time order
- Student cards: attendees grouped by club, flattened for card pages

Priority: HIGH - Determines page order of every report
Dependencies: data_models, record_normalizer
"""

import logging
import unicodedata
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .config import GRADE_ORDER, MAX_SCHEDULE_ITEMS, NUMERIC_GRADE_PATTERN
from .data_models import Attendee, AttendeeGroup, RegistrationRecord, ReportSession
from .record_normalizer import build_attendee

logger = logging.getLogger(__name__)

RankFunction = Callable[[str], Optional[int]]


def get_grade_order(name: str) -> Optional[int]:
    """
    Rank of a grade or Pathfinder class name

    "Friend" -> 5, "5th Grade" -> 5, "Grade 10" -> 10, "Staff" -> 21,
    anything unrecognised -> None
    """
    key = " ".join((name or "").casefold().split())
    if not key:
        return None
    if key in GRADE_ORDER:
        return GRADE_ORDER[key]
    match = NUMERIC_GRADE_PATTERN.match(key)
    if match:
        return int(match.group(1))
    return None


def sort_text(value: str) -> str:
    """Comparison key close to localeCompare: accents and case ignored"""
    decomposed = unicodedata.normalize("NFKD", value or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold().strip()


def member_sort_key(attendee: Attendee) -> Tuple[str, str]:
    return (sort_text(attendee.first_name), sort_text(attendee.last_name))


def sort_members(attendees: Sequence[Attendee]) -> List[Attendee]:
    """First name, then last name; equal names keep file order"""
    return sorted(attendees, key=member_sort_key)


def group_attendees(
    attendees: Sequence[Attendee],
    rank: RankFunction = get_grade_order,
) -> List[AttendeeGroup]:
    """
    Partition attendees by their group key and order everything

    Args:
        attendees: Attendees in file order
        rank: Maps a group name to its priority, None for unknown groups

    Returns:
        Non-empty groups, ordered, with sorted members
    """
    buckets: Dict[str, List[Attendee]] = {}
    for attendee in attendees:
        buckets.setdefault(attendee.group, []).append(attendee)

    groups = [
        AttendeeGroup(name=name, members=sort_members(members), rank=rank(name))
        for name, members in buckets.items()
    ]
    return sort_groups(groups)


def sort_groups(groups: Sequence[AttendeeGroup]) -> List[AttendeeGroup]:
    """Known ranks first (ascending), unknown after; empty groups removed"""
    indexed = [(i, g) for i, g in enumerate(groups) if not g.is_empty]
    skipped = len(groups) - len(indexed)
    if skipped:
        logger.debug(f"Skipping {skipped} empty group(s)")

    indexed.sort(
        key=lambda item: (item[1].rank is None, item[1].rank or 0, item[0])
    )
    return [g for _, g in indexed]


def attendance_group_key(record: RegistrationRecord) -> str:
    """Assignment area, falling back to grade and then club"""
    return record.assignment_area or record.grade or record.club


def build_attendance_groups(session: ReportSession) -> List[AttendeeGroup]:
    """Groups for the attendance sheets; registrants with no group are left off"""
    attendees = []
    unassigned = 0
    for record in session.records:
        key = attendance_group_key(record)
        if not key:
            unassigned += 1
            continue
        attendees.append(build_attendee(record, key))

    if unassigned:
        logger.info(f"  ℹ️  {unassigned} registrant(s) without an assignment area left off the sheets")

    return group_attendees(attendees, rank=get_grade_order)


def build_honor_day_groups(session: ReportSession) -> List[AttendeeGroup]:
    """One group per honor slot (time order) holding everyone signed up for it"""
    groups = []
    for slot in session.layout.honor_slots:
        members = [
            build_attendee(record, slot.title)
            for record in session.records
            if record.is_signed_up(slot)
        ]
        groups.append(
            AttendeeGroup(name=slot.title, members=sort_members(members))
        )
    # Slots are already in time order; sort_groups keeps it and drops empties
    return sort_groups(groups)


def build_card_attendees(
    session: ReportSession,
    max_items: int = MAX_SCHEDULE_ITEMS,
) -> List[Attendee]:
    """Attendees with schedules, grouped by club and flattened in page order"""
    attendees = [
        build_attendee(record, record.club or record.group or record.grade, session.layout, max_items)
        for record in session.records
    ]
    groups = group_attendees(attendees, rank=get_grade_order)
    return [member for group in groups for member in group.members]
