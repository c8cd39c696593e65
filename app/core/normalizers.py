# app/core/normalizers.py

"""
Value normalization utilities for record comparison.

Ensures consistent values regardless of which file a record came from.
"""

from typing import Any
import re

# Leading decimal number, optionally signed, optionally with exponent
_LEADING_FLOAT = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def normalize_value(value: Any) -> Any:
    """
    Normalize a single field value for comparison.

    - Strings: trimmed and lowercased
    - Numbers: passed through unchanged
    - Anything else (dates, booleans, ...): text form, trimmed and lowercased

    Callers must filter out absent (None) values first.
    """
    if isinstance(value, str):
        return value.strip().lower()

    # bool is an int subclass but compares as text
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value

    if isinstance(value, bool):
        return "true" if value else "false"

    return str(value).strip().lower()


def parse_amount(value: Any) -> float:
    """
    Coerce an amount cell to a number.

    Reads the leading numeric part of text ("12.50 USD" -> 12.5).
    Anything unparseable becomes 0.
    """
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, (int, float)):
        return value if value == value else 0  # NaN

    match = _LEADING_FLOAT.match(str(value).strip())
    if not match:
        return 0

    try:
        parsed = float(match.group(0))
    except ValueError:
        return 0
    return parsed or 0


def normalize_header(key: str) -> str:
    """Normalize a column header for field-name detection."""
    return str(key).strip().lower()
