"""Validation engine."""

from .engine import BALANCE_TOLERANCE, ValidationEngine, validate

__all__ = ["BALANCE_TOLERANCE", "ValidationEngine", "validate"]
