"""Custom exceptions for the statement validator."""


class StatementValidationError(Exception):
    """Base exception for statement validation errors."""

    pass


class UnsupportedFormatError(StatementValidationError):
    """The uploaded file is neither CSV nor XML."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(
            f"Unsupported file format: {filename!r}. Please upload a CSV or XML file."
        )


class StatementParseError(StatementValidationError):
    """Error parsing a statement file."""

    pass


class CsvParseError(StatementParseError):
    """Error parsing a CSV statement."""

    pass


class XmlParseError(StatementParseError):
    """Error parsing an XML statement."""

    pass


class MissingFieldError(StatementParseError):
    """An XML transaction lacks a required child element."""

    def __init__(self, record_index: int, field_name: str):
        self.record_index = record_index
        self.field_name = field_name
        super().__init__(
            f"Transaction at index {record_index} is missing required field '{field_name}'"
        )


class ConfigurationError(StatementValidationError):
    """Error in configuration."""

    pass


class ReportGenerationError(StatementValidationError):
    """Error generating Excel report."""

    pass
