"""Common interface for statement parsers."""

from abc import ABC, abstractmethod
from pathlib import Path
import logging

from ..config import ValidatorConfig
from ..models.transaction import StatementFormat, TransactionRecord
from ..utils.exceptions import StatementParseError

logger = logging.getLogger(__name__)


class StatementParser(ABC):
    """Abstract base class for statement parsers."""

    format: StatementFormat
    parse_error: type[StatementParseError] = StatementParseError

    def __init__(self, config: ValidatorConfig):
        """
        Initialize the parser with configuration.

        Args:
            config: Application configuration object
        """
        self.config = config

    @property
    def encoding(self) -> str:
        return "utf-8"

    @abstractmethod
    def parse_text(self, text: str) -> list[TransactionRecord]:
        """
        Parse decoded statement content.

        Args:
            text: Whole statement as a string

        Returns:
            Records in source order

        Raises:
            StatementParseError: If the content cannot be parsed
        """
        pass

    def parse_bytes(self, content: bytes) -> list[TransactionRecord]:
        """Decode raw upload bytes with the configured encoding and parse them."""
        try:
            text = content.decode(self.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.error(f"Failed to decode {self.format.value} content: {e}")
            raise self.parse_error(
                f"Could not decode file as {self.encoding}: {e}"
            ) from e
        return self.parse_text(text)

    def parse_file(self, file_path: Path) -> list[TransactionRecord]:
        """
        Parse a statement file from disk.

        Args:
            file_path: Path to the statement

        Returns:
            Records in source order
        """
        file_path = Path(file_path)
        logger.info(f"Parsing {self.format.value.upper()} statement: {file_path}")
        records = self.parse_bytes(file_path.read_bytes())
        logger.info(f"Extracted {len(records)} records from {file_path.name}")
        return records
