"""Utility modules."""

from .exceptions import (
    StatementValidationError,
    UnsupportedFormatError,
    StatementParseError,
    CsvParseError,
    XmlParseError,
    MissingFieldError,
    ConfigurationError,
    ReportGenerationError,
)
from .logging_config import setup_logging

__all__ = [
    "StatementValidationError",
    "UnsupportedFormatError",
    "StatementParseError",
    "CsvParseError",
    "XmlParseError",
    "MissingFieldError",
    "ConfigurationError",
    "ReportGenerationError",
    "setup_logging",
]
