"""Data models for statement validation."""

from .transaction import (
    ErrorKind,
    StatementFormat,
    TransactionRecord,
    ValidationResult,
    ValidationSummary,
)

__all__ = [
    "ErrorKind",
    "StatementFormat",
    "TransactionRecord",
    "ValidationResult",
    "ValidationSummary",
]
