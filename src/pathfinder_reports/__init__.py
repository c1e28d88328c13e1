"""Printable Pathfinder reports from Planning Center registration exports."""

from .config import ReportSettings
from .data_models import ReportType
from .data_processor import ReportDataProcessor
from .report_generator import ReportGenerator

__version__ = "1.0.0"

__all__ = ["ReportDataProcessor", "ReportGenerator", "ReportSettings", "ReportType"]
