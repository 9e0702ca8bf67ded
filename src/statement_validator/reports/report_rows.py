"""Reshape validation results into report rows for display and export."""

from dataclasses import dataclass
from typing import Iterable

from ..models.transaction import ValidationResult

REPORT_COLUMNS = ("Transaction Reference", "Description", "Error Description")


@dataclass(frozen=True)
class ReportRow:
    """One line of the validation report."""

    transaction_reference: str
    description: str
    error_description: str

    def as_dict(self) -> dict[str, str]:
        return dict(zip(REPORT_COLUMNS, self.as_tuple()))

    def as_tuple(self) -> tuple[str, str, str]:
        return (self.transaction_reference, self.description, self.error_description)


def to_report_rows(results: Iterable[ValidationResult]) -> list[ReportRow]:
    """Map failing records to report rows, keeping their order."""
    return [
        ReportRow(
            transaction_reference=result.reference,
            description=result.description,
            error_description=result.error_description,
        )
        for result in results
    ]
