"""Customer statement validation: duplicate references and end balance checks."""

__version__ = "0.1.0"

from .pipeline import ValidationRun, validate_file, validate_statement  # noqa: E402

__all__ = ["ValidationRun", "validate_file", "validate_statement", "__version__"]
