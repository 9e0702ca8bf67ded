"""
CSV statement parser.
Reads delimited statements with a header row into canonical records.
"""

from decimal import Decimal
from io import StringIO
import csv
from typing import Optional
import logging

import pandas as pd

from ..models.transaction import StatementFormat, TransactionRecord
from ..utils.exceptions import CsvParseError
from .amounts import ParseFailure, parse_amount
from .base import StatementParser

logger = logging.getLogger(__name__)

BALANCE_FIELDS = ("start_balance", "mutation", "end_balance")


class CsvStatementParser(StatementParser):
    """
    Parser for CSV customer statements.

    Columns are located by header name. Rows missing a balance keep that
    field as None instead of being dropped, so they still reach validation.
    """

    format = StatementFormat.CSV
    parse_error = CsvParseError

    def __init__(self, config):
        super().__init__(config)
        self.csv_config = config.input.csv
        self.column_mappings = self.csv_config.column_mappings

    @property
    def encoding(self) -> str:
        return self.csv_config.encoding

    def parse_text(self, text: str) -> list[TransactionRecord]:
        """
        Parse CSV text into transaction records.

        Args:
            text: CSV content including the header row

        Returns:
            Records in row order

        Raises:
            CsvParseError: If the content has no header or a row's field
                count differs from the header's
        """
        self._check_row_widths(text)
        df = self._read_dataframe(text)

        header = [str(value).strip() for value in df.iloc[0]]
        body = df.iloc[1:]

        positions = self._locate_columns(header)

        records: list[TransactionRecord] = []
        for idx, values in enumerate(body.itertuples(index=False, name=None)):
            records.append(self._normalize_row(values, positions, idx))

        logger.debug(f"Parsed {len(records)} CSV records")
        return records

    def _check_row_widths(self, text: str) -> None:
        """
        Reject rows whose field count differs from the header's.

        Fields are counted on the raw text because pandas pads short rows
        with values that cannot be told apart from empty cells.
        """
        if not text.strip():
            raise CsvParseError("CSV file is empty")

        try:
            rows = csv.reader(StringIO(text), delimiter=self.csv_config.delimiter)
            widths = [len(row) for row in rows if any(field.strip() for field in row)]
        except csv.Error as e:
            logger.error(f"Failed to read CSV content: {e}")
            raise CsvParseError(f"Failed to read CSV content: {e}") from e

        if not widths:
            raise CsvParseError("CSV file has no header row")

        expected = widths[0]
        for line, width in enumerate(widths[1:], start=1):
            if width != expected:
                relation = "fewer" if width < expected else "more"
                logger.error(f"CSV data row {line} has {width} fields, header has {expected}")
                raise CsvParseError(
                    f"Row {line} has {relation} fields than the header "
                    f"({width} found, {expected} expected)"
                )

    def _read_dataframe(self, text: str) -> pd.DataFrame:
        """
        Load the CSV into an all-string DataFrame, header row included.

        The header is read as data so that pandas reports every row that is
        wider than the header instead of folding extra fields into an index.
        """
        try:
            df = pd.read_csv(
                StringIO(text),
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                delimiter=self.csv_config.delimiter,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            logger.error(f"Failed to read CSV content: {e}")
            raise CsvParseError(f"Failed to read CSV content: {e}") from e

        # Whitespace-only lines survive skip_blank_lines; drop them here
        blank = df.apply(
            lambda row: all(pd.isna(v) or not str(v).strip() for v in row), axis=1
        )
        df = df[~blank].reset_index(drop=True)

        if df.empty:
            raise CsvParseError("CSV file has no header row")

        return df

    def _locate_columns(self, header: list[str]) -> dict[str, Optional[int]]:
        """
        Map each canonical field to its column position.

        Args:
            header: Column names from the header row

        Returns:
            Field name to position, None where the column is absent
        """
        positions: dict[str, Optional[int]] = {}
        for field_name in ("reference", "description") + BALANCE_FIELDS:
            column = self.column_mappings.get(field_name)
            positions[field_name] = header.index(column) if column in header else None

        if positions["reference"] is None:
            column = self.column_mappings.get("reference")
            logger.error(f"CSV header has no '{column}' column: {header}")
            raise CsvParseError(f"Missing required column '{column}'")

        for field_name in BALANCE_FIELDS:
            if positions[field_name] is None:
                logger.warning(
                    f"CSV header has no '{self.column_mappings.get(field_name)}' "
                    f"column; records will not be reconciled"
                )

        return positions

    def _normalize_row(
        self, values: tuple, positions: dict[str, Optional[int]], idx: int
    ) -> TransactionRecord:
        """
        Convert one CSV row to a TransactionRecord.

        Args:
            values: Cell values in header order
            positions: Column positions from _locate_columns
            idx: Zero-based data row index

        Returns:
            Canonical record; unparseable balances are left as None
        """

        def cell(field_name: str) -> Optional[str]:
            position = positions[field_name]
            return None if position is None else values[position]

        balances: dict[str, Optional[Decimal]] = {}
        for field_name in BALANCE_FIELDS:
            raw = cell(field_name)
            amount = parse_amount(raw)
            if isinstance(amount, ParseFailure):
                if raw is not None and raw.strip():
                    logger.warning(
                        f"Row {idx + 1}: {field_name} {raw!r} ignored ({amount.reason})"
                    )
                balances[field_name] = None
            else:
                balances[field_name] = amount

        return TransactionRecord(
            reference=(cell("reference") or "").strip(),
            description=(cell("description") or "").strip(),
            source=self.format,
            position=idx,
            **balances,
        )
