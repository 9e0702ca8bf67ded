"""Shared fixtures for statement validator tests."""

import pytest

from statement_validator.config import ValidatorConfig

CSV_HEADER = "Reference,Description,Start Balance,Mutation,End Balance"


def make_csv(*rows: str) -> str:
    """Build CSV text from data rows, header first."""
    return "\n".join((CSV_HEADER,) + rows) + "\n"


def make_xml(*transactions: tuple) -> str:
    """Build an XML statement from (reference, description, start, mutation, end) tuples."""
    body = "".join(
        f'<record reference="{ref}">'
        f"<description>{desc}</description>"
        f"<startBalance>{start}</startBalance>"
        f"<mutation>{mutation}</mutation>"
        f"<endBalance>{end}</endBalance>"
        "</record>"
        for ref, desc, start, mutation, end in transactions
    )
    return f'<?xml version="1.0" encoding="UTF-8"?><records>{body}</records>'


@pytest.fixture
def config() -> ValidatorConfig:
    return ValidatorConfig()
