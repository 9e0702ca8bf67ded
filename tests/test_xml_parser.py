"""Tests for the XML statement parser."""

from decimal import Decimal

import pytest

from conftest import make_xml
from statement_validator.config import ValidatorConfig
from statement_validator.models.transaction import StatementFormat
from statement_validator.parsers.xml_parser import XmlNode, XmlStatementParser
from statement_validator.utils.exceptions import MissingFieldError, XmlParseError


@pytest.fixture
def parser(config):
    return XmlStatementParser(config)


def test_parses_transactions_in_document_order(parser):
    text = make_xml(
        ("138932", "Tickets for Rik", "94.9", "+14.63", "109.53"),
        ("131254", "Candy for Vincent", "5429", "-939", "6368"),
    )

    records = parser.parse_text(text)

    assert [r.reference for r in records] == ["138932", "131254"]
    assert records[0].description == "Tickets for Rik"
    assert records[0].start_balance == Decimal("94.9")
    assert records[0].mutation == Decimal("14.63")
    assert records[1].end_balance == Decimal("6368")
    assert records[1].source is StatementFormat.XML
    assert records[1].position == 1


def test_parse_bytes_honours_encoding_declaration(parser):
    text = (
        '<?xml version="1.0" encoding="ISO-8859-1"?>'
        '<records><record reference="T1"><description>Rik Theuß</description>'
        "<startBalance>1</startBalance><mutation>1</mutation>"
        "<endBalance>2</endBalance></record></records>"
    )

    records = parser.parse_bytes(text.encode("iso-8859-1"))

    assert records[0].description == "Rik Theuß"


def test_missing_balance_element_fails_with_record_index(parser):
    text = (
        "<records>"
        '<record reference="T1"><description>ok</description><startBalance>1</startBalance>'
        "<mutation>1</mutation><endBalance>2</endBalance></record>"
        '<record reference="T2"><description>no start</description>'
        "<mutation>1</mutation><endBalance>2</endBalance></record>"
        "</records>"
    )

    with pytest.raises(MissingFieldError) as exc_info:
        parser.parse_text(text)

    assert exc_info.value.record_index == 1
    assert exc_info.value.field_name == "startBalance"


def test_element_names_are_case_sensitive(parser):
    text = (
        '<records><record reference="T1"><description>x</description>'
        "<StartBalance>1</StartBalance><mutation>1</mutation>"
        "<endBalance>2</endBalance></record></records>"
    )

    with pytest.raises(MissingFieldError):
        parser.parse_text(text)


def test_missing_description_element_fails(parser):
    text = (
        '<records><record reference="T1"><startBalance>1</startBalance>'
        "<mutation>1</mutation><endBalance>2</endBalance></record></records>"
    )

    with pytest.raises(MissingFieldError) as exc_info:
        parser.parse_text(text)

    assert exc_info.value.field_name == "description"


def test_unparseable_amount_is_treated_as_absent(parser):
    records = parser.parse_text(make_xml(("T1", "bad", "abc", "1", "2")))

    assert records[0].start_balance is None
    assert not records[0].is_reconcilable


def test_missing_reference_attribute_gives_empty_reference(parser):
    text = (
        "<records><record><description>x</description><startBalance>1</startBalance>"
        "<mutation>1</mutation><endBalance>2</endBalance></record></records>"
    )

    assert parser.parse_text(text)[0].reference == ""


@pytest.mark.parametrize("text", ["", "<records><record>", "not xml at all"])
def test_malformed_markup_is_a_parse_error(parser, text):
    with pytest.raises(XmlParseError):
        parser.parse_text(text)


def test_record_element_filter():
    config = ValidatorConfig(**{"input": {"xml": {"record_element": "record"}}})
    parser = XmlStatementParser(config)
    text = make_xml(("T1", "x", "1", "1", "2")).replace(
        "</records>", "<footer>ignored</footer></records>"
    )

    records = parser.parse_text(text)

    assert [r.reference for r in records] == ["T1"]


def test_xml_node_lookups():
    root = XmlStatementParser.load_tree(
        '<record reference="T1"><mutation>5</mutation><mutation>6</mutation></record>'
    )

    assert root.name == "record"
    assert root.attribute("reference") == "T1"
    assert root.attribute("missing") is None
    assert root.child("mutation").text == "5"
    assert root.child("endBalance") is None


def test_xml_node_empty_element_text_is_empty_string():
    node = XmlStatementParser.load_tree("<description/>")

    assert node == XmlNode(name="description")


def test_deeply_nested_markup_inside_a_field_is_ignored(parser):
    nested = "<x>" * 2000 + "</x>" * 2000
    text = make_xml(("T1", f"deep{nested}", "1", "1", "2"))

    records = parser.parse_text(text)

    assert records[0].description == "deep"
    assert records[0].end_balance == Decimal("2")


def test_load_tree_keeps_root_record_and_field_levels_only():
    root = XmlStatementParser.load_tree(
        '<records><record reference="T1"><description>a<b>c</b></description></record></records>'
    )

    description = root.child("record").child("description")
    assert description.text == "a"
    assert description.children == ()
