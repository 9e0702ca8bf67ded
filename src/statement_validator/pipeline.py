"""
End-to-end validation of one uploaded statement.
Raw bytes and a filename in; failing records and run totals out.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

from .config import ValidatorConfig
from .models.transaction import TransactionRecord, ValidationResult, ValidationSummary
from .parsers.detector import detect_format, select_parser
from .reports.report_rows import ReportRow, to_report_rows
from .validation.engine import ValidationEngine

logger = logging.getLogger(__name__)


@dataclass
class ValidationRun:
    """Everything produced by validating a single file."""

    records: list[TransactionRecord]
    results: list[ValidationResult]
    summary: ValidationSummary

    @property
    def has_errors(self) -> bool:
        return bool(self.results)

    @property
    def report_rows(self) -> list[ReportRow]:
        return to_report_rows(self.results)


def validate_statement(
    content: bytes,
    filename: str,
    config: Optional[ValidatorConfig] = None,
) -> ValidationRun:
    """
    Detect the format, parse and validate one statement.

    The format is checked before the content is touched. Any parse failure
    aborts the run; no partial report is produced.

    Args:
        content: Raw file bytes
        filename: Name of the uploaded file, used for format detection
        config: Application configuration (defaults when omitted)

    Returns:
        The validation run

    Raises:
        UnsupportedFormatError: If the file is not CSV or XML
        StatementParseError: If the content cannot be parsed
    """
    parser = select_parser(filename, config)
    start_time = datetime.now()

    logger.info(f"Validating {parser.format.value.upper()} statement: {filename}")
    records = parser.parse_bytes(content)

    engine = ValidationEngine()
    results = engine.validate(records)

    processing_time = (datetime.now() - start_time).total_seconds()
    summary = engine.summarize(
        records,
        results,
        filename=filename,
        file_format=parser.format,
        processing_time=processing_time,
    )

    return ValidationRun(records=records, results=results, summary=summary)


def validate_file(
    file_path: Path, config: Optional[ValidatorConfig] = None
) -> ValidationRun:
    """Read a statement from disk and validate it."""
    file_path = Path(file_path)
    # Reject unsupported files before reading them
    detect_format(file_path.name)
    return validate_statement(file_path.read_bytes(), file_path.name, config)
