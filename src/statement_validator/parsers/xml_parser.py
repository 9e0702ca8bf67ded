"""
XML statement parser.
Converts the document into a small node model, then reads one
transaction per child of the root element.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Union
import logging
import xml.etree.ElementTree as ET

from ..models.transaction import StatementFormat, TransactionRecord
from ..utils.exceptions import MissingFieldError, XmlParseError
from .amounts import ParseFailure, parse_amount
from .base import StatementParser

logger = logging.getLogger(__name__)

BALANCE_FIELDS = ("start_balance", "mutation", "end_balance")

# Root, transaction and field elements; anything nested deeper is not read
DOCUMENT_DEPTH = 2


@dataclass(frozen=True)
class XmlNode:
    """An element with its attributes, text and child elements."""

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""
    children: tuple["XmlNode", ...] = ()

    @classmethod
    def from_element(
        cls, element: ET.Element, max_depth: Optional[int] = None
    ) -> "XmlNode":
        """
        Build a node from an ElementTree element.

        Args:
            element: Source element
            max_depth: Levels of descendants to keep; None keeps them all

        Returns:
            Node tree, with children beyond max_depth left out
        """
        if max_depth is not None and max_depth <= 0:
            children: tuple["XmlNode", ...] = ()
        else:
            next_depth = None if max_depth is None else max_depth - 1
            children = tuple(cls.from_element(child, next_depth) for child in element)
        return cls(
            name=element.tag,
            attributes=dict(element.attrib),
            text=element.text or "",
            children=children,
        )

    def attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def child(self, name: str) -> Optional["XmlNode"]:
        """First child element with exactly this name."""
        return next((c for c in self.children if c.name == name), None)


class XmlStatementParser(StatementParser):
    """
    Parser for XML customer statements.

    Unlike the CSV parser, a transaction missing one of its child elements
    fails the whole parse with MissingFieldError.
    """

    format = StatementFormat.XML
    parse_error = XmlParseError

    def __init__(self, config):
        super().__init__(config)
        self.xml_config = config.input.xml
        self.field_mappings = self.xml_config.field_mappings

    def parse_bytes(self, content: bytes) -> list[TransactionRecord]:
        """Parse raw bytes, letting the XML declaration pick the encoding."""
        return self._parse_document(content)

    def parse_text(self, text: str) -> list[TransactionRecord]:
        """
        Parse XML text into transaction records.

        Args:
            text: XML document

        Returns:
            Records in document order

        Raises:
            XmlParseError: If the markup cannot be parsed
            MissingFieldError: If a transaction lacks a required child element
        """
        return self._parse_document(text)

    def _parse_document(self, source: Union[str, bytes]) -> list[TransactionRecord]:
        root = self.load_tree(source)

        transactions = [
            node
            for node in root.children
            if self.xml_config.record_element is None
            or node.name == self.xml_config.record_element
        ]

        records = [
            self._normalize_node(node, idx) for idx, node in enumerate(transactions)
        ]
        logger.debug(f"Parsed {len(records)} XML records from <{root.name}>")
        return records

    @staticmethod
    def load_tree(source: Union[str, bytes]) -> XmlNode:
        """
        Parse markup into an XmlNode tree.

        Raises:
            XmlParseError: If the document is not well-formed
        """
        try:
            element = ET.fromstring(source)
        except (ET.ParseError, ValueError) as e:
            logger.error(f"Failed to parse XML content: {e}")
            raise XmlParseError(
                f"Invalid XML file. Please ensure it contains the expected structure: {e}"
            ) from e
        return XmlNode.from_element(element, max_depth=DOCUMENT_DEPTH)

    def _normalize_node(self, node: XmlNode, idx: int) -> TransactionRecord:
        """
        Convert one transaction element to a TransactionRecord.

        Args:
            node: Transaction element
            idx: Zero-based position among transaction elements

        Returns:
            Canonical record

        Raises:
            MissingFieldError: If a mapped child element is absent
        """
        reference = node.attribute(self.xml_config.reference_attribute)
        if reference is None:
            logger.warning(
                f"Transaction {idx}: no '{self.xml_config.reference_attribute}' attribute"
            )

        description = self._required_child(node, "description", idx).text

        balances: dict[str, Optional[Decimal]] = {}
        for field_name in BALANCE_FIELDS:
            raw = self._required_child(node, field_name, idx).text
            amount = parse_amount(raw)
            if isinstance(amount, ParseFailure):
                logger.warning(
                    f"Transaction {idx}: {field_name} {raw!r} ignored ({amount.reason})"
                )
                balances[field_name] = None
            else:
                balances[field_name] = amount

        return TransactionRecord(
            reference=(reference or "").strip(),
            description=description.strip(),
            source=self.format,
            position=idx,
            **balances,
        )

    def _required_child(self, node: XmlNode, field_name: str, idx: int) -> XmlNode:
        element_name = self.field_mappings.get(field_name, field_name)
        child = node.child(element_name)
        if child is None:
            logger.error(f"Transaction {idx} is missing <{element_name}>")
            raise MissingFieldError(idx, element_name)
        return child
