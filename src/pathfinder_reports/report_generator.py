#!/usr/bin/env python3
"""
REPORT GENERATOR - Printable HTML/PDF generation engine
Render attendance sheets, honor-day sheets and student cards

GENERATION PROCESS:
1. Take a loaded ReportSession
2. Build ordered groups (grouping engine)
3. Paginate: one sheet per group, or 4 cards per page
4. Render the Jinja2 template with inline print CSS
5. Write HTML, and PDF through WeasyPrint when it is installed

FEATURES:
✅ Numbered attendee rows with checkbox and 👕 shirt checkbox
✅ Blank write-in rows after the last attendee of every group
✅ Empty card placeholders keep the 2x2 print grid intact
✅ Page breaks between logical pages
✅ Dated document titles (yyyy-mm-dd) for sensible PDF names
✅ Index page describing every report

Priority: HIGH - Core report generation
Dependencies: Jinja2, WeasyPrint (optional), data_processor, grouping
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

# Template engine
from jinja2 import Environment, FileSystemLoader, select_autoescape

# PDF generation
try:
    from weasyprint import HTML

    WEASYPRINT_AVAILABLE = True
except (ImportError, OSError):
    WEASYPRINT_AVAILABLE = False

from .config import TEMPLATES_DIR, ReportSettings
from .data_models import Attendee, AttendeeGroup, ReportSession, ReportType
from .grouping import build_attendance_groups, build_card_attendees, build_honor_day_groups

logger = logging.getLogger(__name__)


@dataclass
class ReportDefinition:
    """Static description of one printable report"""

    report_type: ReportType
    title: str
    template: str
    container_id: str
    description: str
    required_columns: List[str]
    required_fields: List[str] = field(default_factory=list)
    needs_honor_slots: bool = False
    sample_heading: str = ""
    sample_lines: List[str] = field(default_factory=list)


REPORTS: Dict[ReportType, ReportDefinition] = {
    ReportType.ATTENDANCE_SHEETS: ReportDefinition(
        report_type=ReportType.ATTENDANCE_SHEETS,
        title="Attendance Sheets",
        template="sheets.html",
        container_id="sheetsContainer",
        description=(
            "One sign-in sheet per Pathfinder class, ordered by grade. Each sheet lists "
            "registrants by first name with a check-in box, a shirt box and blank rows "
            "for walk-ins."
        ),
        required_columns=["First Name", "Last Name", "Assignment Area: Pathfinders"],
        required_fields=["first_name", "last_name", "assignment_area"],
        sample_heading="Friend",
        sample_lines=["1  ☐  👕 YS  Amy Abel", "2  ☐  👕 YM  Amy Zee", "3  ☐  ☐  ________________"],
    ),
    ReportType.HONOR_DAY: ReportDefinition(
        report_type=ReportType.HONOR_DAY,
        title="Honor Day Attendance",
        template="sheets.html",
        container_id="sheetsContainer",
        description=(
            "One attendance sheet per honor time slot, in schedule order, listing "
            "everyone who signed up for that honor."
        ),
        required_columns=["First Name", "Last Name", "Honor columns such as 9:00 AM Knot Tying"],
        required_fields=["first_name", "last_name"],
        needs_honor_slots=True,
        sample_heading="9:00 AM Knot Tying",
        sample_lines=["1  ☐  👕 AM  Ben Carter", "2  ☐  👕 YM  Amy Zee", "3  ☐  ☐  ________________"],
    ),
    ReportType.STUDENT_CARDS: ReportDefinition(
        report_type=ReportType.STUDENT_CARDS,
        title="Honor Day Student Cards",
        template="student_cards.html",
        container_id="cardsContainer",
        description=(
            "A schedule card for every student, four to a landscape page, with each "
            "honor's time and a line for the instructor's initials."
        ),
        required_columns=["First Name", "Last Name", "Club", "Honor columns such as 9:00 AM Knot Tying"],
        required_fields=["first_name", "last_name", "club"],
        needs_honor_slots=True,
        sample_heading="Honor Day Schedule: Ben Carter (Hawks)",
        sample_lines=["9:00 AM  Knot Tying  ____", "10:30 AM  Birds  ____", "1:30 PM  Camping Skills I  ____"],
    ),
}


@dataclass
class SheetRow:
    number: int
    name: str
    shirt_size: str = ""


@dataclass
class SheetPage:
    """One printed attendance sheet"""

    heading: str
    rows: List[SheetRow]
    write_in_numbers: List[int]


@dataclass
class CardPage:
    """One printed page of cards; None marks an empty placeholder"""

    cards: List[Optional[Attendee]]


def get_report_definition(report_type: Any) -> ReportDefinition:
    """Look up a report by enum or id string"""
    try:
        return REPORTS[ReportType(report_type)]
    except ValueError:
        known = ", ".join(r.value for r in ReportType)
        raise ValueError(f"Unknown report '{report_type}'. Choose one of: {known}")


def build_sheet_pages(groups: Sequence[AttendeeGroup], write_in_rows: int) -> List[SheetPage]:
    """One page per non-empty group; write-in rows continue the numbering"""
    pages = []
    for group in groups:
        if group.is_empty:
            continue
        rows = [
            SheetRow(number=i, name=member.full_name, shirt_size=member.shirt_size)
            for i, member in enumerate(group.members, start=1)
        ]
        first_blank = len(rows) + 1
        pages.append(
            SheetPage(
                heading=group.name,
                rows=rows,
                write_in_numbers=list(range(first_blank, first_blank + write_in_rows)),
            )
        )
    return pages


def paginate_cards(attendees: Sequence[Attendee], per_page: int = 4) -> List[CardPage]:
    """Split cards into pages, padding the last page with placeholders"""
    pages = []
    for start in range(0, len(attendees), per_page):
        cards: List[Optional[Attendee]] = list(attendees[start:start + per_page])
        cards.extend([None] * (per_page - len(cards)))
        pages.append(CardPage(cards=cards))
    return pages


class ReportGenerator:
    """Render printable reports from a ReportSession"""

    def __init__(self, settings: Optional[ReportSettings] = None):
        """
        Initialize report generator

        Args:
            settings: Rendering options (defaults: today, 5 write-in rows)
        """
        self.settings = settings or ReportSettings()
        self.templates_dir = Path(self.settings.templates_dir or TEMPLATES_DIR)
        self.output_dir = Path(self.settings.output_dir)

        # Initialize Jinja2 environment
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )

        logger.debug(f"Templates: {self.templates_dir}")
        logger.debug(f"Output: {self.output_dir}")

    def document_title(self, report_type: Any) -> str:
        """Title embedding the print date, e.g. 'Honor Day 2026-01-24'"""
        definition = get_report_definition(report_type)
        return f"{definition.title} {self.settings.date_stamp}"

    def render_report(self, report_type: Any, session: ReportSession) -> str:
        """Render the full HTML document for one report"""
        definition = get_report_definition(report_type)
        self._warn_missing_columns(definition, session)

        template_data = self._base_template_data(definition)
        template_data["source_name"] = session.source_name
        template_data["record_count"] = session.record_count

        if definition.report_type == ReportType.STUDENT_CARDS:
            attendees = build_card_attendees(session, self.settings.max_schedule_items)
            pages = paginate_cards(attendees, self.settings.cards_per_page)
            template_data["card_pages"] = pages
            logger.info(f"🪪 {len(attendees)} cards on {len(pages)} page(s)")
        else:
            if definition.report_type == ReportType.HONOR_DAY:
                groups = build_honor_day_groups(session)
            else:
                groups = build_attendance_groups(session)
            pages = build_sheet_pages(groups, self.settings.write_in_rows)
            template_data["sheet_pages"] = pages
            logger.info(f"📄 {len(pages)} sheet(s) for {definition.title}")

        template = self.env.get_template(definition.template)
        return template.render(**template_data)

    def render_index(self) -> str:
        """Index page listing every report and the columns it needs"""
        template = self.env.get_template("index.html")
        reports = [
            {
                "definition": definition,
                "file_name": f"{self.document_title(definition.report_type)}.html",
            }
            for definition in REPORTS.values()
        ]
        return template.render(
            organization=self.settings.organization,
            print_date=self._print_date_display(),
            reports=reports,
        )

    def write_report(
        self,
        report_type: Any,
        session: ReportSession,
        pdf: bool = True,
    ) -> List[Path]:
        """
        Render a report and write it to the output directory

        Args:
            report_type: Report id or ReportType
            session: Loaded registration data
            pdf: Also produce a PDF when WeasyPrint is available

        Returns:
            Paths of the written files (HTML first)
        """
        html_content = self.render_report(report_type, session)
        stem = self.document_title(report_type)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        html_path = self.output_dir / f"{stem}.html"
        html_path.write_text(html_content, encoding="utf-8")
        logger.info(f"✅ Report written: {html_path}")

        written = [html_path]
        if pdf:
            if WEASYPRINT_AVAILABLE:
                pdf_path = html_path.with_suffix(".pdf")
                self._generate_pdf_weasyprint(html_content, pdf_path)
                written.append(pdf_path)
            else:
                logger.warning("WeasyPrint not available - open the HTML and print to PDF instead")
        return written

    def write_index(self) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        index_path = self.output_dir / "index.html"
        index_path.write_text(self.render_index(), encoding="utf-8")
        logger.info(f"✅ Index written: {index_path}")
        return index_path

    def _base_template_data(self, definition: ReportDefinition) -> Dict[str, Any]:
        return {
            "definition": definition,
            "heading": f"{definition.title} - {self.settings.organization}",
            "document_title": self.document_title(definition.report_type),
            "container_id": definition.container_id,
            "print_date": self._print_date_display(),
            "show_shirt": self.settings.show_shirt_checkbox,
        }

    def _print_date_display(self) -> str:
        return self.settings.print_date.strftime("%B %d, %Y")

    def _warn_missing_columns(self, definition: ReportDefinition, session: ReportSession):
        missing = [f for f in definition.required_fields if not session.layout.has_field(f)]
        if missing:
            logger.warning(f"⚠️  {definition.title}: missing columns {missing}, fields left blank")
        if definition.needs_honor_slots and not session.layout.honor_slots:
            logger.warning(f"⚠️  {definition.title}: no honor time-slot columns found")

    def _generate_pdf_weasyprint(self, html_content: str, output_path: Path):
        """Generate PDF using WeasyPrint"""
        HTML(string=html_content, base_url=str(self.templates_dir)).write_pdf(str(output_path))
        logger.info(f"PDF generated with WeasyPrint: {output_path}")
