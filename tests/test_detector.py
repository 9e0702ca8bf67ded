"""Tests for statement format detection."""

import pytest

from statement_validator.models.transaction import StatementFormat
from statement_validator.parsers.csv_parser import CsvStatementParser
from statement_validator.parsers.detector import detect_format, select_parser
from statement_validator.parsers.xml_parser import XmlStatementParser
from statement_validator.utils.exceptions import UnsupportedFormatError


def test_detect_format_by_suffix():
    assert detect_format("statement.csv") is StatementFormat.CSV
    assert detect_format("records.xml") is StatementFormat.XML
    assert detect_format("archive.2024.csv") is StatementFormat.CSV


def test_select_parser_returns_matching_parser(config):
    assert isinstance(select_parser("statement.csv", config), CsvStatementParser)
    assert isinstance(select_parser("records.xml", config), XmlStatementParser)


def test_select_parser_uses_default_config_when_omitted():
    parser = select_parser("statement.csv")

    assert parser.config.input.csv.delimiter == ","


@pytest.mark.parametrize(
    "filename", ["statement.txt", "statement", "statement.CSV", "records.Xml", "csv", "statement.csv.bak"]
)
def test_unsupported_formats_are_rejected(filename):
    with pytest.raises(UnsupportedFormatError) as exc_info:
        select_parser(filename)

    assert exc_info.value.filename == filename
