"""
Unit Tests for the record normalizer

Tests for:
- Boilerplate removal from honor labels
- Time slot extraction and ordering keys
- Typed records and schedules
"""

from pathfinder_reports.column_classifier import classify_columns
from pathfinder_reports.csv_parser import parse_csv
from pathfinder_reports.record_normalizer import (
    build_attendee,
    build_record,
    build_schedule,
    clean_column_name,
    extract_time_slot,
    get_time_order,
    honor_label,
)


def _load(text):
    rows = parse_csv(text)
    layout = classify_columns(list(rows[0].keys()))
    records = [build_record(row, layout, i) for i, row in enumerate(rows, start=1)]
    return layout, records


class TestCleanColumnName:
    def test_boilerplate_removed(self):
        header = "9:00 AM Knot Tying (Click on time to see options for honors)"

        assert clean_column_name(header) == "9:00 AM Knot Tying"

    def test_case_insensitive(self):
        assert clean_column_name("Birds - click on time to see options for honors") == "Birds"

    def test_plain_header_untouched(self):
        assert clean_column_name("10:30 AM Birds") == "10:30 AM Birds"


class TestTimeSlots:
    def test_extract_time_slot_normalizes(self):
        assert extract_time_slot("9:00am Honor") == "9:00 AM"
        assert extract_time_slot("Honor 09:30 p.m.") == "9:30 PM"
        assert extract_time_slot("14:00 Honor") == "14:00"
        assert extract_time_slot("Honor") is None

    def test_get_time_order(self):
        assert get_time_order("9:00 AM") == 540
        assert get_time_order("12:00 PM") == 720
        assert get_time_order("12:15 AM") == 15
        assert get_time_order("1:30 PM") == 810
        assert get_time_order("14:00") == 840

    def test_malformed_times_return_none(self):
        assert get_time_order("25:00") is None
        assert get_time_order("13:00 PM") is None
        assert get_time_order("9:75 AM") is None
        assert get_time_order("no time") is None

    def test_honor_label(self):
        assert honor_label("9:00 AM Honor A") == "Honor A"
        assert honor_label("Knot Tying - 2:15 PM") == "Knot Tying"


class TestBuildRecord:
    def test_known_columns_and_residual(self):
        layout, records = _load("First Name,Last Name,Club,Notes\nJane,Doe,Eagles,hi\n")

        record = records[0]
        assert record.first_name == "Jane"
        assert record.club == "Eagles"
        assert record.grade == ""
        assert record.extra == {"Notes": "hi"}

    def test_missing_columns_left_blank(self):
        layout, records = _load("First Name\nJane\n")

        assert records[0].last_name == ""
        assert records[0].has_name


class TestBuildSchedule:
    def test_concrete_scenario(self):
        layout, records = _load(
            "First Name,Last Name,Club,9:00 AM Honor A,12:00 PM Lunch\n"
            "Jane,Doe,Eagles,Bravery,\n"
        )

        attendee = build_attendee(records[0], records[0].club, layout)

        assert attendee.first_name == "Jane"
        assert attendee.last_name == "Doe"
        assert attendee.group == "Eagles"
        assert [(i.time, i.honor) for i in attendee.schedule] == [("9:00 AM", "Honor A")]

    def test_only_populated_slots(self):
        layout, records = _load(
            "First Name,10:00 AM Birds,9:00 AM Knots\nJane,,Yes\n"
        )

        schedule = build_schedule(records[0], layout)

        assert [i.honor for i in schedule] == ["Knots"]

    def test_more_than_nine_keeps_earliest_by_time(self):
        hours = list(range(18, 7, -1))  # latest column first
        headers = []
        for h in hours:
            marker = "AM" if h < 12 else "PM"
            headers.append(f"{h % 12 or 12}:00 {marker} Honor {h}")
        text = "First Name," + ",".join(headers) + "\n" + "Jane," + ",".join(["Yes"] * len(hours)) + "\n"
        layout, records = _load(text)

        schedule = build_schedule(records[0], layout)

        assert len(schedule) == 9
        assert [i.honor for i in schedule] == [f"Honor {h}" for h in range(8, 17)]

    def test_malformed_time_sorts_last(self):
        layout, records = _load(
            "First Name,25:00 Broken,1:00 PM Late,8:00 AM Early\nJane,Yes,Yes,Yes\n"
        )

        schedule = build_schedule(records[0], layout)

        assert [i.honor for i in schedule] == ["Early", "Late", "Broken"]

    def test_custom_cap(self):
        layout, records = _load(
            "First Name,8:00 AM A,9:00 AM B,10:00 AM C\nJane,x,x,x\n"
        )

        assert len(build_schedule(records[0], layout, max_items=2)) == 2
