"""Record validation module."""

from workload_import.validation.core import (
    ValidationReport,
    ValidationViolation,
    validate_records,
    validate_table,
)
from workload_import.validation.reporter import ConsoleReporter

__all__ = [
    "ConsoleReporter",
    "ValidationReport",
    "ValidationViolation",
    "validate_records",
    "validate_table",
]
