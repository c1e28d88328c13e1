#!/usr/bin/env python3
"""
DATA MODELS - Pydantic schemas for registration export data
Type-safe structures for classified columns, registrants, schedules and groups

RECORD TYPES:
✅ ClassifiedColumn / HonorSlot / ColumnLayout: header classification, once per file
✅ RegistrationRecord: one typed CSV row (known columns + residual mapping)
✅ ScheduleItem / Attendee: what a sheet row or a card shows
✅ AttendeeGroup: one page-level partition (club, grade, honor slot)
✅ ReportSession: everything derived from the currently loaded file

VALIDATION RULES:
- All text fields are trimmed strings, never None
- Records are frozen once built
- Honor slots keep their original column index for tie-breaking

Priority: CRITICAL - Foundation for all data processing
Dependencies: Pydantic for validation
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ColumnKind(str, Enum):
    """How a CSV header is used by the reports"""
    METADATA = "metadata"
    HONOR_SLOT = "honor_slot"
    IGNORED = "ignored"


class ReportType(str, Enum):
    """Available printable reports"""
    ATTENDANCE_SHEETS = "attendance-sheets"
    HONOR_DAY = "honor-day"
    STUDENT_CARDS = "honor-day-student-cards"


class ClassifiedColumn(BaseModel):
    """A header tagged with its role"""

    model_config = ConfigDict(frozen=True)

    header: str = Field(..., description="Trimmed header text")
    index: int = Field(..., ge=0, description="Original column position")
    kind: ColumnKind = Field(..., description="metadata, honor_slot or ignored")
    field: Optional[str] = Field(None, description="Canonical record field for metadata columns")


class HonorSlot(BaseModel):
    """An honor-slot column with its parsed time and label"""

    model_config = ConfigDict(frozen=True)

    header: str = Field(..., description="Raw header text")
    index: int = Field(..., ge=0, description="Original column position")
    time: str = Field("", description="Normalized time token, e.g. '9:00 AM'")
    honor: str = Field(..., description="Honor label with boilerplate removed")
    order: Optional[int] = Field(None, description="Minute of day, None when the time is malformed")

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        """Valid times first by minute, malformed last, then column order"""
        if self.order is None:
            return (1, 0, self.index)
        return (0, self.order, self.index)

    @property
    def title(self) -> str:
        """Heading used on honor-day sheets"""
        return f"{self.time} {self.honor}".strip()


class ColumnLayout(BaseModel):
    """Classification of every header of one file"""

    model_config = ConfigDict(frozen=True)

    columns: List[ClassifiedColumn] = Field(default_factory=list)
    honor_slots: List[HonorSlot] = Field(default_factory=list)

    @property
    def metadata_fields(self) -> Dict[str, str]:
        """Canonical field -> header (first matching header wins)"""
        fields: Dict[str, str] = {}
        for column in self.columns:
            if column.kind == ColumnKind.METADATA and column.field:
                fields.setdefault(column.field, column.header)
        return fields

    @property
    def ignored_headers(self) -> List[str]:
        return [c.header for c in self.columns if c.kind == ColumnKind.IGNORED]

    def has_field(self, field: str) -> bool:
        return field in self.metadata_fields


class RegistrationRecord(BaseModel):
    """One CSV data row with known columns pulled out"""

    model_config = ConfigDict(frozen=True)

    row_number: int = Field(..., ge=1, description="1-based data row position")
    first_name: str = Field("", description="Registrant first name")
    last_name: str = Field("", description="Registrant last name")
    club: str = Field("", description="Club name")
    grade: str = Field("", description="Grade or Pathfinder class")
    group: str = Field("", description="Free-form group column")
    assignment_area: str = Field("", description="Assignment Area: Pathfinders value")
    shirt_size: str = Field("", description="Shirt size if collected")

    honor_values: Dict[str, str] = Field(default_factory=dict, description="Honor header -> cell value")
    extra: Dict[str, str] = Field(default_factory=dict, description="Unclassified columns")

    @field_validator(
        "first_name", "last_name", "club", "grade", "group", "assignment_area", "shirt_size",
        mode="before",
    )
    @classmethod
    def clean_text(cls, v):
        """Missing cells become empty strings"""
        if v is None:
            return ""
        return str(v).strip()

    @property
    def has_name(self) -> bool:
        return bool(self.first_name or self.last_name)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def is_signed_up(self, slot: HonorSlot) -> bool:
        """True when the registrant picked something for this honor slot"""
        return bool(self.honor_values.get(slot.header, "").strip())


class ScheduleItem(BaseModel):
    """One line of a student card"""

    model_config = ConfigDict(frozen=True)

    time: str = Field("", description="Display time")
    honor: str = Field(..., description="Honor label")
    order: Optional[int] = Field(None, description="Minute of day used for sorting")
    column_index: int = Field(0, ge=0, description="Source column for tie-breaking")
    initials: str = Field("", description="Left blank, filled in by the instructor")


class Attendee(BaseModel):
    """A registrant as shown on a sheet or card"""

    model_config = ConfigDict(frozen=True)

    first_name: str = ""
    last_name: str = ""
    group: str = Field("", description="Group key (club, grade, assignment area)")
    shirt_size: str = ""
    schedule: List[ScheduleItem] = Field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class AttendeeGroup(BaseModel):
    """A named, ordered set of attendees rendered as one page section"""

    model_config = ConfigDict(frozen=True)

    name: str
    members: List[Attendee] = Field(default_factory=list)
    rank: Optional[int] = Field(None, description="Priority from the order table, None if unknown")

    @property
    def is_empty(self) -> bool:
        return len(self.members) == 0


class ReportSession(BaseModel):
    """Everything derived from one loaded CSV file"""

    model_config = ConfigDict(frozen=True)

    source_name: str = Field(..., description="File name or label of the loaded data")
    loaded_at: datetime = Field(default_factory=datetime.now)
    layout: ColumnLayout = Field(default_factory=ColumnLayout)
    records: List[RegistrationRecord] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @property
    def record_count(self) -> int:
        return len(self.records)
