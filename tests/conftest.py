"""
Pytest Configuration and Fixtures

Provides common fixtures for all tests including:
- Planning Center style CSV exports
- Loaded report sessions
- Report settings with a fixed print date
"""

from datetime import date

import pytest

from pathfinder_reports.config import ReportSettings
from pathfinder_reports.data_processor import ReportDataProcessor

HONOR_HEADER = "9:00 AM Knot Tying (Click on time to see options for honors)"

SAMPLE_CSV = (
    "First Name,Last Name,Club,Assignment Area: Pathfinders,Shirt Size,"
    f'"{HONOR_HEADER}",10:30 AM Birds,12:00 PM Lunch,1:30 PM Camping Skills I,9:00 AM,Notes\n'
    "Amy,Zee,Eagles,Friend,YM,Yes,,Pizza,Yes,,\n"
    'Amy,Abel,Eagles,Friend,YS,,Yes,Pizza,,,"Allergic to nuts, peanuts"\n'
    "Ben,Carter,Hawks,Companion,AM,Yes,Yes,,Yes,,\n"
    "Cara,Diaz,Hawks,Ranger,AL,,,,,,\n"
)


@pytest.fixture
def sample_csv_text():
    """Four registrants, three honor slots, a lunch column and a bare time column"""
    return SAMPLE_CSV


@pytest.fixture
def sample_csv_file(tmp_path, sample_csv_text):
    path = tmp_path / "registrations.csv"
    path.write_text(sample_csv_text, encoding="utf-8")
    return path


@pytest.fixture
def processor():
    return ReportDataProcessor()


@pytest.fixture
def sample_session(processor, sample_csv_text):
    return processor.load_text(sample_csv_text, source_name="registrations.csv")


@pytest.fixture
def settings(tmp_path):
    """Settings with a fixed print date and a temporary output directory"""
    return ReportSettings(print_date=date(2026, 1, 24), output_dir=tmp_path / "out")
