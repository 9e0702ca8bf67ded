"""
Command-line interface for the customer statement validator.
"""

from pathlib import Path
from typing import Optional
import logging
import sys

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .config import ValidatorConfig, generate_default_config, load_config
from .models.transaction import ValidationSummary
from .parsers.detector import select_parser
from .pipeline import validate_file
from .reports.excel_generator import ExcelReportGenerator
from .reports.report_rows import REPORT_COLUMNS, ReportRow
from .utils.exceptions import StatementValidationError
from .utils.logging_config import setup_logging

console = Console()

PREVIEW_LIMIT = 20


@click.group()
@click.version_option(version=__version__)
def main():
    """Customer Statement Validation Tool."""
    pass


@main.command()
@click.argument("statement_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Output Excel file path")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--dry-run", is_flag=True, help="Validate and show results without generating report"
)
def validate(
    statement_file: Path,
    config: Optional[Path],
    output: Optional[Path],
    verbose: bool,
    dry_run: bool,
):
    """
    Validate a CSV or XML customer statement.

    Reports duplicate transaction references and records whose end balance
    does not equal start balance plus mutation.

    STATEMENT_FILE: Path to the .csv or .xml statement
    """
    try:
        validator_config = _load(config, verbose)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task(f"Validating {statement_file.name}...", total=None)
            run = validate_file(statement_file, validator_config)
            progress.update(task, completed=True)

        _display_summary(run.summary)

        if not run.has_errors:
            console.print("\n[green]No validation errors found[/green]")
            return

        rows = run.report_rows
        _display_report(rows)

        if dry_run:
            console.print("\n[yellow]Dry run - no report generated[/yellow]")
            return

        report_generator = ExcelReportGenerator(validator_config)
        if output is None:
            output = report_generator.default_output_path()

        report_path = report_generator.generate_report(rows, output, summary=run.summary)
        console.print(f"\n[green]Report generated: {report_path}[/green]")

    except StatementValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@main.command()
@click.argument("statement_file", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def parse(statement_file: Path, config: Optional[Path]):
    """
    Parse a statement and display its normalized records.

    STATEMENT_FILE: Path to the .csv or .xml statement
    """
    try:
        validator_config = _load(config, verbose=False)
        parser = select_parser(statement_file.name, validator_config)
        records = parser.parse_file(statement_file)
    except StatementValidationError as e:
        console.print(f"[red]Error parsing file: {e}[/red]")
        sys.exit(1)

    table = Table(title=f"Statement Records: {statement_file.name}")
    table.add_column("Reference")
    table.add_column("Description")
    table.add_column("Start Balance", justify="right")
    table.add_column("Mutation", justify="right")
    table.add_column("End Balance", justify="right")

    for record in records[:PREVIEW_LIMIT]:
        table.add_row(
            record.reference or "-",
            (
                record.description[:40] + "..."
                if len(record.description) > 40
                else record.description
            ),
            _format_amount(record.start_balance),
            _format_amount(record.mutation),
            _format_amount(record.end_balance),
        )

    console.print(table)

    if len(records) > PREVIEW_LIMIT:
        console.print(f"\n... and {len(records) - PREVIEW_LIMIT} more records")

    console.print(f"\nTotal records: {len(records)}")


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


def _load(config_path: Optional[Path], verbose: bool) -> ValidatorConfig:
    """Load configuration and set up logging from it."""
    validator_config = load_config(config_path)
    level = logging.DEBUG if verbose else validator_config.logging.level
    setup_logging(level, log_format=validator_config.logging.format)
    return validator_config


def _format_amount(amount) -> str:
    return "-" if amount is None else f"{amount:,.2f}"


def _display_summary(summary: ValidationSummary) -> None:
    """Display validation summary in console."""
    table = Table(title="Validation Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("File", summary.filename)
    table.add_row("Format", summary.file_format.value.upper())
    table.add_row("Total Records", str(summary.total_records))
    table.add_row("Validated Records", str(summary.reconcilable_records))
    table.add_row("Skipped Records", str(summary.skipped_records))
    table.add_row("Duplicate References", str(summary.duplicate_count))
    table.add_row("End Balance Errors", str(summary.mismatch_count))
    table.add_row("Pass Rate", f"{summary.pass_rate:.1f}%")
    table.add_row("Processing Time", f"{summary.processing_time_seconds:.2f}s")

    console.print(table)


def _display_report(rows: list[ReportRow]) -> None:
    """Display the failing records in console."""
    table = Table(title="Validation Report")
    for column in REPORT_COLUMNS:
        table.add_column(column, style="red" if column == "Error Description" else None)

    for row in rows:
        table.add_row(*row.as_tuple())

    console.print(table)


if __name__ == "__main__":
    main()
