"""Report assembly and Excel export."""

from .excel_generator import ExcelReportGenerator
from .report_rows import REPORT_COLUMNS, ReportRow, to_report_rows

__all__ = ["ExcelReportGenerator", "REPORT_COLUMNS", "ReportRow", "to_report_rows"]
