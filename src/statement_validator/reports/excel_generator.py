"""
Excel report generator for validation results.
Writes the failing records and the run summary to a workbook.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.worksheet.worksheet import Worksheet

from ..config import ValidatorConfig
from ..models.transaction import ValidationSummary
from ..utils.exceptions import ReportGenerationError
from .report_rows import REPORT_COLUMNS, ReportRow

logger = logging.getLogger(__name__)

# Style definitions
HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True)
ERROR_FILL = PatternFill(start_color="FFC7CE", end_color="FFC7CE", fill_type="solid")
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)


class ExcelReportGenerator:
    """Generates the validation report workbook."""

    def __init__(self, config: Optional[ValidatorConfig] = None):
        """
        Initialize the report generator.

        Args:
            config: Application configuration
        """
        self.config = config or ValidatorConfig()
        self.sheet_config = self.config.output.sheets

    def default_output_path(self, now: Optional[datetime] = None) -> Path:
        """Build the report filename from the configured template."""
        now = now or datetime.now()
        template = self.config.output.excel.filename_template
        return Path(
            template.format(date=now.strftime("%Y%m%d"), time=now.strftime("%H%M%S"))
        )

    def generate_report(
        self,
        rows: list[ReportRow],
        output_path: Path,
        summary: Optional[ValidationSummary] = None,
    ) -> Path:
        """
        Write the validation report.

        Args:
            rows: Report rows, one per failing record
            output_path: Path for output file
            summary: Run totals for the summary sheet (optional)

        Returns:
            Path to generated report

        Raises:
            ReportGenerationError: If there is nothing to report or the
                workbook cannot be written
        """
        if not rows:
            raise ReportGenerationError("No validation report available to download.")

        logger.info(f"Generating Excel report: {output_path}")

        wb = Workbook()
        if wb.active:
            wb.remove(wb.active)

        if self.sheet_config.report.enabled:
            self._create_report_sheet(wb, rows)

        if summary is not None and self.sheet_config.summary.enabled:
            self._create_summary_sheet(wb, summary)

        if not wb.worksheets:
            raise ReportGenerationError("All report sheets are disabled in configuration")

        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            wb.save(output_path)
        except OSError as e:
            logger.error(f"Failed to save report: {e}")
            raise ReportGenerationError(f"Failed to save report {output_path}: {e}") from e

        logger.info(f"Report saved: {output_path} ({len(rows)} rows)")
        return output_path

    def _create_report_sheet(self, wb: Workbook, rows: list[ReportRow]) -> None:
        """Create the sheet listing each failing record."""
        ws = wb.create_sheet(self.sheet_config.report.name)

        for col, header in enumerate(REPORT_COLUMNS, start=1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.border = THIN_BORDER

        for row_num, row in enumerate(rows, start=2):
            for col, value in enumerate(row.as_tuple(), start=1):
                cell = ws.cell(row=row_num, column=col)
                self._write_text(cell, value)
                cell.border = THIN_BORDER
                cell.fill = ERROR_FILL

        ws.freeze_panes = "A2"
        self._auto_fit_columns(ws)

    def _create_summary_sheet(self, wb: Workbook, summary: ValidationSummary) -> None:
        ws = wb.create_sheet(self.sheet_config.summary.name)

        ws["A1"] = "Statement Validation Summary"
        ws["A1"].font = Font(size=16, bold=True)
        ws.merge_cells("A1:B1")

        summary_data = [
            ("File:", summary.filename),
            ("Format:", summary.file_format.value.upper()),
            ("Generated At:", datetime.now().strftime("%Y-%m-%d %H:%M:%S")),
            ("Total Records:", summary.total_records),
            ("Validated Records:", summary.reconcilable_records),
            ("Skipped Records:", summary.skipped_records),
            ("Failing Records:", summary.failed_records),
            ("Duplicate References:", summary.duplicate_count),
            ("End Balance Errors:", summary.mismatch_count),
            ("Pass Rate:", f"{summary.pass_rate:.1f}%"),
            ("Processing Time:", f"{summary.processing_time_seconds:.2f} seconds"),
        ]

        for i, (label, value) in enumerate(summary_data, start=3):
            ws[f"A{i}"] = label
            ws[f"A{i}"].font = Font(bold=True)
            if isinstance(value, str):
                self._write_text(ws[f"B{i}"], value)
            else:
                ws[f"B{i}"] = value
            ws[f"B{i}"].alignment = Alignment(horizontal="left")

        ws.column_dimensions["A"].width = 25
        ws.column_dimensions["B"].width = 40

    @staticmethod
    def _write_text(cell, value: str) -> None:
        """
        Store statement text as a literal string cell.

        Control characters that XLSX cannot hold are removed, and the cell
        type is pinned so values such as "=1+1" are not saved as formulas.
        """
        cell.value = ILLEGAL_CHARACTERS_RE.sub("", value)
        cell.data_type = "s"

    def _auto_fit_columns(self, ws: Worksheet) -> None:
        """Auto-fit column widths based on content."""
        for column_cells in ws.columns:
            max_length = max(
                (len(str(cell.value)) for cell in column_cells if cell.value), default=0
            )
            ws.column_dimensions[column_cells[0].column_letter].width = min(
                max_length + 2, 60
            )
