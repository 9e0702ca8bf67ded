"""Tests for the CSV statement parser."""

from decimal import Decimal

import pytest

from conftest import CSV_HEADER, make_csv
from statement_validator.config import ValidatorConfig
from statement_validator.models.transaction import StatementFormat
from statement_validator.parsers.csv_parser import CsvStatementParser
from statement_validator.utils.exceptions import CsvParseError


@pytest.fixture
def parser(config):
    return CsvStatementParser(config)


def test_parses_rows_into_records_in_order(parser):
    text = make_csv(
        "194261,Book John Smith,21.6,-41.83,-20.23",
        "112806,Subscription from Jan Dekker,105.75,-8.57,97.18",
    )

    records = parser.parse_text(text)

    assert [r.reference for r in records] == ["194261", "112806"]
    first = records[0]
    assert first.description == "Book John Smith"
    assert first.start_balance == Decimal("21.6")
    assert first.mutation == Decimal("-41.83")
    assert first.end_balance == Decimal("-20.23")
    assert first.source is StatementFormat.CSV
    assert [r.position for r in records] == [0, 1]


def test_skips_blank_lines(parser):
    text = CSV_HEADER + "\n\nT1,First,1,1,2\n   \n\nT2,Second,2,2,4\n\n"

    records = parser.parse_text(text)

    assert [r.reference for r in records] == ["T1", "T2"]


def test_blank_balance_leaves_record_unreconcilable(parser):
    records = parser.parse_text(make_csv("T1,No start,,50,150"))

    assert len(records) == 1
    assert records[0].start_balance is None
    assert records[0].mutation == Decimal("50")
    assert not records[0].is_reconcilable


def test_unparseable_balance_is_treated_as_absent(parser):
    records = parser.parse_text(make_csv("T1,Bad amount,EUR 10,50,60"))

    assert records[0].start_balance is None
    assert not records[0].is_reconcilable


def test_thousands_separators_in_quoted_cells(parser):
    records = parser.parse_text(make_csv('T1,Big,"1,000.00","2,500.50","3,500.50"'))

    assert records[0].start_balance == Decimal("1000.00")
    assert records[0].mutation == Decimal("2500.50")
    assert records[0].end_balance == Decimal("3500.50")


def test_columns_are_matched_by_name_and_extras_ignored(parser):
    text = (
        "Account,End Balance,Mutation,Start Balance,Description,Reference\n"
        "NL91RABO0315273637,150,50,100,Reordered,T9\n"
    )

    record = parser.parse_text(text)[0]

    assert record.reference == "T9"
    assert record.description == "Reordered"
    assert record.start_balance == Decimal("100")
    assert record.end_balance == Decimal("150")


def test_missing_balance_column_keeps_records(parser):
    text = "Reference,Description,Start Balance,Mutation\nT1,No end column,1,2\n"

    records = parser.parse_text(text)

    assert records[0].end_balance is None


def test_missing_reference_column_is_a_parse_error(parser):
    with pytest.raises(CsvParseError, match="Reference"):
        parser.parse_text("Description,Start Balance,Mutation,End Balance\nx,1,1,2\n")


def test_row_with_extra_fields_is_a_parse_error(parser):
    text = make_csv("T1,Fine,1,1,2", "T2,Too,many,fields,in,this,row")

    with pytest.raises(CsvParseError):
        parser.parse_text(text)


def test_row_with_missing_fields_is_a_parse_error(parser):
    text = make_csv("T1,Fine,1,1,2", "T2,Short,1")

    with pytest.raises(CsvParseError, match="fewer fields"):
        parser.parse_text(text)


def test_short_row_is_rejected_even_when_it_leaves_balances_blank(parser):
    """A short row is not read as a row with empty trailing cells."""
    text = make_csv("T1,Fine,1,1,2", "T1,Short,1")

    with pytest.raises(CsvParseError, match="Row 2 has fewer fields"):
        parser.parse_text(text)


def test_trailing_empty_fields_are_not_a_short_row(parser):
    records = parser.parse_text(make_csv("T1,Blank end,1,1,"))

    assert records[0].end_balance is None


def test_empty_content_is_a_parse_error(parser):
    with pytest.raises(CsvParseError):
        parser.parse_text("")


def test_header_only_yields_no_records(parser):
    assert parser.parse_text(CSV_HEADER + "\n") == []


def test_parse_bytes_strips_byte_order_mark(parser):
    content = ("\ufeff" + make_csv("T1,BOM,1,1,2")).encode("utf-8")

    records = parser.parse_bytes(content)

    assert records[0].reference == "T1"


def test_parse_bytes_rejects_undecodable_content(parser):
    with pytest.raises(CsvParseError, match="decode"):
        parser.parse_bytes(b"Reference\n\xff\xfe\xfa\n")


def test_custom_delimiter_and_column_names():
    config = ValidatorConfig(
        **{
            "input": {
                "csv": {
                    "delimiter": ";",
                    "column_mappings": {
                        "reference": "Ref",
                        "description": "Omschrijving",
                        "start_balance": "Begin",
                        "mutation": "Mutatie",
                        "end_balance": "Eind",
                    },
                }
            }
        }
    )
    parser = CsvStatementParser(config)

    records = parser.parse_text("Ref;Omschrijving;Begin;Mutatie;Eind\nT1;Koffie;10;-2.5;7.5\n")

    assert records[0].reference == "T1"
    assert records[0].mutation == Decimal("-2.5")


def test_parse_file_reads_from_disk(parser, tmp_path):
    path = tmp_path / "statement.csv"
    path.write_text(make_csv("T1,Disk,1,1,2"), encoding="utf-8")

    records = parser.parse_file(path)

    assert len(records) == 1
