"""
Validation engine for statement records.
Flags duplicate references and end balances that do not reconcile.
"""

from decimal import Decimal
from typing import Iterable
import logging

from ..models.transaction import (
    ErrorKind,
    StatementFormat,
    TransactionRecord,
    ValidationResult,
    ValidationSummary,
)

logger = logging.getLogger(__name__)

# Absolute, fixed; absorbs rounding noise in two-decimal currency values
BALANCE_TOLERANCE = Decimal("0.001")


class ValidationEngine:
    """
    Single-pass validator over canonical transaction records.

    Each call to validate() starts from an empty set of seen references,
    so one engine can be reused across files without carrying state.
    """

    tolerance = BALANCE_TOLERANCE

    def validate(self, records: Iterable[TransactionRecord]) -> list[ValidationResult]:
        """
        Validate records in order and return only the failing ones.

        Only records with a reference and all three balances take part.
        The first occurrence of a reference is the original; later ones are
        duplicates. Remarks are ordered duplicate first, then balance.

        Args:
            records: Canonical records in source order

        Returns:
            Failing records in source order
        """
        seen_references: set[str] = set()
        results: list[ValidationResult] = []
        skipped = 0

        for record in records:
            if not self.is_eligible(record):
                skipped += 1
                continue

            remarks: list[ErrorKind] = []

            if record.reference in seen_references:
                remarks.append(ErrorKind.DUPLICATE_REFERENCE)
            else:
                seen_references.add(record.reference)

            if self.is_balance_mismatch(record):
                remarks.append(ErrorKind.BALANCE_MISMATCH)

            if remarks:
                results.append(
                    ValidationResult(
                        reference=record.reference,
                        description=record.description,
                        remarks=tuple(remarks),
                    )
                )

        if skipped:
            logger.info(f"Skipped {skipped} records without a reference or balances")
        logger.info(
            f"Validation complete: {len(results)} failing records, "
            f"{len(seen_references)} unique references"
        )

        return results

    @staticmethod
    def is_eligible(record: TransactionRecord) -> bool:
        return bool(record.reference) and record.is_reconcilable

    def is_balance_mismatch(self, record: TransactionRecord) -> bool:
        """End balance differs from start + mutation by more than the tolerance."""
        difference = record.balance_difference
        return difference is not None and abs(difference) > self.tolerance

    def summarize(
        self,
        records: list[TransactionRecord],
        results: list[ValidationResult],
        filename: str,
        file_format: StatementFormat,
        processing_time: float = 0.0,
    ) -> ValidationSummary:
        """
        Build the totals for one validation run.

        Args:
            records: All parsed records
            results: Output of validate() for those records
            filename: Name of the validated file
            file_format: Format the file was parsed as
            processing_time: Time taken in seconds

        Returns:
            Validation summary
        """
        return ValidationSummary(
            filename=filename,
            file_format=file_format,
            total_records=len(records),
            reconcilable_records=sum(1 for r in records if self.is_eligible(r)),
            failed_records=len(results),
            duplicate_count=sum(1 for r in results if r.is_duplicate),
            mismatch_count=sum(1 for r in results if r.is_balance_mismatch),
            processing_time_seconds=processing_time,
        )


def validate(records: Iterable[TransactionRecord]) -> list[ValidationResult]:
    """Validate records with a fresh engine."""
    return ValidationEngine().validate(records)
