"""
Per-value rule checks.

Each check returns a user-facing message when the value breaks the rule,
or None when it passes. ``parse_number`` is shared with the transformer so
a value that validates is a value that converts.
"""

import math
import re

from workload_import.schemas.entities import RuleKind, ValidationRule

_NUMBER = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def parse_number(value: str) -> int | float:
    """
    Parse decimal text into a number.

    Integral text becomes an int, anything else with a fraction or exponent
    a float. Surrounding whitespace is ignored.

    Raises:
        ValueError: If the text is not a finite decimal number.
    """
    text = value.strip()
    if not _NUMBER.fullmatch(text):
        msg = f"Not a number: {value!r}"
        raise ValueError(msg)
    if _INTEGER.fullmatch(text):
        return int(text)
    number = float(text)
    if not math.isfinite(number):
        msg = f"Not a finite number: {value!r}"
        raise ValueError(msg)
    return number


def is_blank(value: str | None) -> bool:
    """Whether a value is absent or empty after trimming."""
    return value is None or not value.strip()


def check_positive_number(field: str, value: str) -> str | None:
    try:
        number = parse_number(value)
    except ValueError:
        return f"{field} must be a positive number"
    if number <= 0:
        return f"{field} must be a positive number"
    return None


def check_email_shape(field: str, value: str) -> str | None:
    if _EMAIL.fullmatch(value) is None:
        return f"{field} must be a valid email address"
    return None


def check_enumerated(field: str, value: str, allowed: tuple[str, ...]) -> str | None:
    # Exact, case-sensitive membership
    if value not in allowed:
        return f"{field} must be one of: {', '.join(allowed)}"
    return None


def check_rule(rule: ValidationRule, field: str, value: str) -> str | None:
    """
    Apply one type rule to a present value.

    Args:
        rule: Rule to apply (presence is checked by the caller).
        field: Field name used in the message.
        value: Raw cell value.

    Returns:
        Violation message, or None if the value passes.
    """
    if rule.kind is RuleKind.POSITIVE_NUMBER:
        return check_positive_number(field, value)
    if rule.kind is RuleKind.EMAIL_SHAPE:
        return check_email_shape(field, value)
    if rule.kind is RuleKind.ENUMERATED:
        return check_enumerated(field, value, rule.allowed_values)
    return None
