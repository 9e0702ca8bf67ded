"""Configuration loader and validation for statement validator settings."""

from pathlib import Path
from typing import Any, Optional
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError

from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CsvInputConfig(BaseModel):
    """Configuration for CSV statement parsing."""

    encoding: str = "utf-8-sig"
    delimiter: str = ","
    column_mappings: dict[str, str] = Field(
        default_factory=lambda: {
            "reference": "Reference",
            "description": "Description",
            "start_balance": "Start Balance",
            "mutation": "Mutation",
            "end_balance": "End Balance",
        }
    )


class XmlInputConfig(BaseModel):
    """Configuration for XML statement parsing."""

    reference_attribute: str = "reference"
    # None means every child of the root element is a transaction
    record_element: Optional[str] = None
    field_mappings: dict[str, str] = Field(
        default_factory=lambda: {
            "description": "description",
            "start_balance": "startBalance",
            "mutation": "mutation",
            "end_balance": "endBalance",
        }
    )


class InputConfig(BaseModel):
    """Configuration for input file parsing."""

    csv: CsvInputConfig = Field(default_factory=CsvInputConfig)
    xml: XmlInputConfig = Field(default_factory=XmlInputConfig)


class ExcelOutputConfig(BaseModel):
    """Configuration for Excel output."""

    filename_template: str = "validation_report_{date}_{time}.xlsx"


class SheetConfig(BaseModel):
    """Configuration for a report sheet."""

    enabled: bool = True
    name: str


class SheetsConfig(BaseModel):
    """Configuration for all report sheets."""

    report: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Validation Report")
    )
    summary: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Summary"))


class OutputConfig(BaseModel):
    """Configuration for output."""

    excel: ExcelOutputConfig = Field(default_factory=ExcelOutputConfig)
    sheets: SheetsConfig = Field(default_factory=SheetsConfig)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ValidatorConfig(BaseModel):
    """Main configuration model for statement validation."""

    input: InputConfig = Field(default_factory=InputConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    config_file_path: Optional[str] = None


def get_default_config() -> dict[str, Any]:
    """Return the default configuration as a dictionary."""
    return ValidatorConfig().model_dump(exclude={"config_file_path"})


def load_config(config_path: Optional[Path] = None) -> ValidatorConfig:
    """
    Load configuration from a YAML file or use defaults.

    Args:
        config_path: Path to YAML configuration file (optional)

    Returns:
        ValidatorConfig object with loaded or default settings

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    config_dict = get_default_config()

    if config_path and config_path.exists():
        logger.info(f"Loading configuration from: {config_path}")
        try:
            with open(config_path, "r") as f:
                user_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigurationError(
                f"Configuration file {config_path} must contain a mapping"
            )

        config_dict = _deep_merge(config_dict, user_config)
        config_dict["config_file_path"] = str(config_path)
    else:
        logger.info("Using default configuration")

    try:
        return ValidatorConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to merge on top

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def generate_default_config(output_path: Path) -> None:
    """
    Generate a default configuration file.

    Args:
        output_path: Path to write the configuration file
    """
    yaml_content = """# Customer Statement Validator Configuration
# The reconciliation tolerance (0.001) is fixed and cannot be configured.

"""
    yaml_content += yaml.dump(
        get_default_config(), default_flow_style=False, sort_keys=False
    )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(yaml_content)

    logger.info(f"Generated configuration file: {output_path}")
