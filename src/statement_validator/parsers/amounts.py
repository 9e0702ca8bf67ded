"""
Amount normalization shared by the CSV and XML parsers.
Turns strings such as " 1,234.50 " into exact Decimal values.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union
import re

THOUSANDS_SEPARATOR = ","

# Optional sign, digits and an optional fraction; no exponents or underscores
PLAIN_DECIMAL = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")


@dataclass(frozen=True)
class ParseFailure:
    """Returned instead of an amount when a value cannot be parsed."""

    raw: Optional[str]
    reason: str


def parse_amount(raw: Optional[str]) -> Union[Decimal, ParseFailure]:
    """
    Parse a bare numeric string into a Decimal.

    Surrounding whitespace and thousands separators are removed first.
    Currency symbols are not stripped, and only plain notation is accepted:
    exponents, digit-group underscores, NaN and Infinity are all rejected.

    Args:
        raw: Amount text as found in the statement

    Returns:
        The parsed Decimal, or a ParseFailure describing why parsing failed
    """
    if raw is None:
        return ParseFailure(raw, "value is missing")

    cleaned = str(raw).strip().replace(THOUSANDS_SEPARATOR, "")
    if not cleaned:
        return ParseFailure(raw, "value is blank")

    if not PLAIN_DECIMAL.fullmatch(cleaned):
        return ParseFailure(raw, "not a decimal number")

    return Decimal(cleaned)
