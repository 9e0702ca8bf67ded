"""Data models for statement records and validation results."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class StatementFormat(Enum):
    """Supported statement file formats."""

    CSV = "csv"
    XML = "xml"


class ErrorKind(Enum):
    """Kinds of validation findings, valued by their report label."""

    DUPLICATE_REFERENCE = "Duplicate Reference"
    BALANCE_MISMATCH = "End Balance Error"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class TransactionRecord:
    """
    Canonical statement line produced by the CSV and XML parsers.

    Balances are exact decimals; a balance that was missing or could not be
    parsed is None, which makes the record ineligible for reconciliation.
    """

    reference: str
    description: str = ""
    start_balance: Optional[Decimal] = None
    mutation: Optional[Decimal] = None
    end_balance: Optional[Decimal] = None

    # Provenance: which parser built the record and where it sat in the file
    source: Optional[StatementFormat] = None
    position: int = 0

    @property
    def is_reconcilable(self) -> bool:
        """All three balance fields are present."""
        return (
            self.start_balance is not None
            and self.mutation is not None
            and self.end_balance is not None
        )

    @property
    def balance_difference(self) -> Optional[Decimal]:
        """Signed gap between the stated and the computed end balance."""
        if not self.is_reconcilable:
            return None
        return self.end_balance - (self.start_balance + self.mutation)


@dataclass(frozen=True)
class ValidationResult:
    """A failing record together with the findings raised against it."""

    reference: str
    description: str
    remarks: tuple[ErrorKind, ...]

    @property
    def error_description(self) -> str:
        return ", ".join(kind.label for kind in self.remarks)

    @property
    def is_duplicate(self) -> bool:
        return ErrorKind.DUPLICATE_REFERENCE in self.remarks

    @property
    def is_balance_mismatch(self) -> bool:
        return ErrorKind.BALANCE_MISMATCH in self.remarks


@dataclass
class ValidationSummary:
    """Totals for a single validation run."""

    filename: str
    file_format: StatementFormat
    total_records: int
    reconcilable_records: int
    failed_records: int
    duplicate_count: int
    mismatch_count: int
    processing_time_seconds: float = 0.0

    @property
    def skipped_records(self) -> int:
        """Records that could not take part in validation."""
        return self.total_records - self.reconcilable_records

    @property
    def pass_rate(self) -> float:
        """Percentage of reconcilable records without findings."""
        if self.reconcilable_records == 0:
            return 0.0
        passed = self.reconcilable_records - self.failed_records
        return (passed / self.reconcilable_records) * 100
