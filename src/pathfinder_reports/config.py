#!/usr/bin/env python3
"""
CONFIG - Column heuristics, ordering tables and report settings
Every rule the pipeline uses to read a Planning Center export lives here

HEURISTICS:
✅ Time-of-day pattern for honor-slot headers (H:MM with optional AM/PM)
✅ "lunch" prefix for meal columns that are never honors
✅ Boilerplate phrases stripped from honor labels
✅ Metadata header aliases (First Name, Last Name, Club, Grade, ...)
✅ Grade / Pathfinder class order for sheet ordering

Priority: HIGH - Shared by classifier, normalizer, grouping and renderer
Dependencies: pydantic for settings validation
"""

import re
from datetime import date
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PACKAGE_DIR = Path(__file__).parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"

ORGANIZATION_NAME = "Pathfinders"

# H:MM with an optional AM/PM marker ("9:00 AM", "9:00am", "12:30 p.m.", "14:00")
TIME_PATTERN = re.compile(
    r"\b(\d{1,2}):(\d{2})(?:\s*([AaPp])\.?\s?[Mm]\.?(?![A-Za-z]))?"
)

LUNCH_PREFIX = "lunch"

BOILERPLATE_PHRASES = (
    "Click on time to see options for honors",
    "Click on the time to see options for honors",
    "Click on time to see honor options",
)

MAX_SCHEDULE_ITEMS = 9
CARDS_PER_PAGE = 4
DEFAULT_WRITE_IN_ROWS = 5

# Canonical record field -> accepted header spellings (compared casefolded)
METADATA_COLUMNS: Dict[str, tuple] = {
    "first_name": ("first name", "firstname", "first"),
    "last_name": ("last name", "lastname", "last"),
    "club": ("club", "club name"),
    "grade": ("grade", "grade level", "current grade"),
    "group": ("group", "group name"),
    "assignment_area": ("assignment area: pathfinders", "assignment area"),
    "shirt_size": ("shirt size", "t-shirt size", "tshirt size"),
}

# Grades first, then Pathfinder classes on the grade they belong to, then adults
GRADE_ORDER: Dict[str, int] = {
    "pre-k": -1,
    "prek": -1,
    "kindergarten": 0,
    "k": 0,
    "friend": 5,
    "companion": 6,
    "explorer": 7,
    "ranger": 8,
    "voyager": 9,
    "guide": 10,
    "teen leader": 11,
    "tlt": 11,
    "master guide": 13,
    "counselor": 20,
    "staff": 21,
    "adult": 22,
}

NUMERIC_GRADE_PATTERN = re.compile(
    r"^(?:grade\s*)?(\d{1,2})(?:st|nd|rd|th)?(?:\s*grade)?$", re.IGNORECASE
)


class ReportSettings(BaseModel):
    """Per-run options for report rendering"""

    model_config = ConfigDict(frozen=True)

    organization: str = Field(ORGANIZATION_NAME, description="Name shown in report titles")
    print_date: date = Field(default_factory=date.today, description="Date printed on pages and in titles")
    write_in_rows: int = Field(DEFAULT_WRITE_IN_ROWS, ge=0, le=50, description="Blank rows appended per sheet")
    show_shirt_checkbox: bool = Field(True, description="Render the 👕 shirt-size checkbox on sheets")
    max_schedule_items: int = Field(MAX_SCHEDULE_ITEMS, ge=1, description="Schedule items kept per card")
    cards_per_page: int = Field(CARDS_PER_PAGE, ge=1, description="Cards per printed page")
    output_dir: Path = Field(Path("output"), description="Where rendered reports are written")
    templates_dir: Optional[Path] = Field(None, description="Override for the bundled templates")

    @field_validator("organization")
    @classmethod
    def validate_organization(cls, v):
        """Organization name must not be blank"""
        if not v or not v.strip():
            raise ValueError("organization must not be empty")
        return v.strip()

    @property
    def date_stamp(self) -> str:
        """Print date as yyyy-mm-dd for titles and filenames"""
        return self.print_date.strftime("%Y-%m-%d")
