"""
Unit Tests for the data processor

Tests for:
- Loading from text and from disk
- Session replacement and reset
- Validation warnings for missing columns and nameless rows
"""

import pytest

from pathfinder_reports.data_processor import ReportDataProcessor


class TestLoading:
    def test_load_text_builds_records(self, sample_session):
        assert sample_session.record_count == 4
        assert sample_session.source_name == "registrations.csv"
        assert len(sample_session.layout.honor_slots) == 3
        assert sample_session.warnings == []

    def test_load_file(self, processor, sample_csv_file):
        session = processor.load_file(sample_csv_file)

        assert session.record_count == 4
        assert processor.session is session

    def test_load_file_with_bom(self, processor, tmp_path):
        path = tmp_path / "bom.csv"
        path.write_text("First Name,Last Name\nJane,Doe\n", encoding="utf-8-sig")

        session = processor.load_file(path)

        assert session.records[0].first_name == "Jane"

    def test_rejects_non_csv(self, processor, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("First Name\nJane\n")

        with pytest.raises(ValueError):
            processor.load_file(path)

    def test_missing_file(self, processor, tmp_path):
        with pytest.raises(FileNotFoundError):
            processor.load_file(tmp_path / "missing.csv")

    def test_header_only_file(self, processor):
        session = processor.load_text("First Name,Last Name,9:00 AM Knots\n")

        assert session.record_count == 0
        assert len(session.layout.honor_slots) == 1

    def test_header_only_file_with_leading_blank_line(self, processor):
        session = processor.load_text("\nFirst Name,Last Name,9:00 AM Knots\n")

        assert session.record_count == 0
        assert session.layout.has_field("first_name")
        assert [s.honor for s in session.layout.honor_slots] == ["Knots"]


class TestSession:
    def test_new_load_replaces_session(self, processor, sample_csv_text):
        first = processor.load_text(sample_csv_text)
        second = processor.load_text("First Name,Last Name,Club\nJane,Doe,Eagles\n")

        assert processor.session is second
        assert first.record_count == 4
        assert second.record_count == 1

    def test_reset(self, processor, sample_csv_text):
        processor.load_text(sample_csv_text)

        processor.reset()

        assert processor.session is None
        with pytest.raises(ValueError):
            processor.require_session()


class TestValidation:
    def test_nameless_rows_skipped_with_warning(self, processor):
        session = processor.load_text("First Name,Last Name,Club\n,,Eagles\nJane,Doe,Eagles\n")

        assert session.record_count == 1
        assert any("Row 1" in w for w in session.warnings)

    def test_missing_columns_warned_not_fatal(self, processor):
        session = processor.load_text("First Name\nJane\n")

        assert session.record_count == 1
        assert any("last name" in w for w in session.warnings)
        assert any("Club" in w for w in session.warnings)

    def test_rows_kept_when_no_name_columns(self, processor):
        session = processor.load_text("Name,Club,9:00 AM Knots\nJane Doe,Eagles,Yes\n")

        assert session.record_count == 1
        assert session.records[0].full_name == ""
        assert session.records[0].club == "Eagles"
        assert not any("skipped" in w for w in session.warnings)

    def test_missing_fields(self, processor):
        processor.load_text("First Name,Club\nJane,Eagles\n")

        assert processor.missing_fields(["first_name", "last_name", "club"]) == ["last_name"]

    def test_validation_report(self, processor, sample_csv_text):
        assert processor.generate_validation_report() == "No CSV file loaded"

        processor.load_text(sample_csv_text, source_name="registrations.csv")
        report = processor.generate_validation_report()

        assert "registrations.csv" in report
        assert "9:00 AM Knot Tying" in report
        assert "No warnings" in report
