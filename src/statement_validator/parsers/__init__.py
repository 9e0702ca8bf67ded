"""Parsers for CSV and XML customer statements."""

from .amounts import ParseFailure, parse_amount
from .base import StatementParser
from .csv_parser import CsvStatementParser
from .detector import detect_format, select_parser
from .xml_parser import XmlNode, XmlStatementParser

__all__ = [
    "ParseFailure",
    "parse_amount",
    "StatementParser",
    "CsvStatementParser",
    "XmlNode",
    "XmlStatementParser",
    "detect_format",
    "select_parser",
]
