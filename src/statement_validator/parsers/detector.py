"""Select a statement parser from the uploaded file's name."""

from typing import Optional
import logging

from ..config import ValidatorConfig
from ..models.transaction import StatementFormat
from ..utils.exceptions import UnsupportedFormatError
from .base import StatementParser
from .csv_parser import CsvStatementParser
from .xml_parser import XmlStatementParser

logger = logging.getLogger(__name__)

# Suffix matching is case-sensitive: "STATEMENT.CSV" is rejected
SUFFIX_FORMATS = {
    ".csv": StatementFormat.CSV,
    ".xml": StatementFormat.XML,
}

PARSERS: dict[StatementFormat, type[StatementParser]] = {
    StatementFormat.CSV: CsvStatementParser,
    StatementFormat.XML: XmlStatementParser,
}


def detect_format(filename: str) -> StatementFormat:
    """
    Determine the statement format from a filename.

    Raises:
        UnsupportedFormatError: If the name does not end in .csv or .xml
    """
    for suffix, statement_format in SUFFIX_FORMATS.items():
        if filename.endswith(suffix):
            return statement_format

    logger.warning(f"Rejected file with unsupported format: {filename}")
    raise UnsupportedFormatError(filename)


def select_parser(
    filename: str, config: Optional[ValidatorConfig] = None
) -> StatementParser:
    """
    Build the parser that handles the given file.

    Args:
        filename: Name of the uploaded file
        config: Application configuration (defaults when omitted)

    Returns:
        A CSV or XML statement parser

    Raises:
        UnsupportedFormatError: If the format is not supported
    """
    statement_format = detect_format(filename)
    return PARSERS[statement_format](config or ValidatorConfig())
