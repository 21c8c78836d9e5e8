"""Cell validators for untrusted spreadsheet input.

Each validator either returns a clean Python value or raises a
:class:`~finarrow.domain.errors.FieldValidationError` naming the field.
Validating an already-validated value returns it unchanged.
"""

import math
import re
from datetime import date, datetime, timedelta
from typing import Any

from dateutil import parser as date_parser

from finarrow.domain.errors import (
    InvalidDateError,
    InvalidNumberError,
    InvalidPercentageError,
    MissingDateError,
)

DEFAULT_BOUND = 1e12
DEFAULT_DATE_MAX_LENGTH = 50

# Spreadsheet serial day 0; 1900 leap-year bug already folded in.
SERIAL_EPOCH = datetime(1899, 12, 30)
# 9999-12-31 as a serial day-count.
MAX_SERIAL_DAY = 2_958_465

_NUMERIC_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_SERIAL_RE = re.compile(r"^\d+(\.\d+)?$")


def _coerce_float(value: Any, field: str, lower: float, upper: float, percent: bool = False) -> float:
    if isinstance(value, bool):
        raise InvalidNumberError(field, lower, upper)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if text.startswith("$"):
            text = text[1:]
        if percent and text.endswith("%"):
            text = text[:-1].strip()
        if not _NUMERIC_RE.match(text):
            raise InvalidNumberError(field, lower, upper)
        number = float(text)
    else:
        raise InvalidNumberError(field, lower, upper)
    if not math.isfinite(number):
        raise InvalidNumberError(field, lower, upper)
    return number


def validate_number(value: Any, field: str, bound: float = DEFAULT_BOUND) -> float:
    """Any finite number within ±bound.

    >>> validate_number("-2,500", "Cash Balance")
    -2500.0
    """
    number = _coerce_float(value, field, -bound, bound)
    if not -bound <= number <= bound:
        raise InvalidNumberError(field, -bound, bound)
    return number


def validate_non_negative(value: Any, field: str, bound: float = DEFAULT_BOUND) -> float:
    """A number in ``[0, bound]``.

    >>> validate_non_negative("$1,200.50", "Revenue")
    1200.5
    """
    number = _coerce_float(value, field, 0, bound)
    if not 0 <= number <= bound:
        raise InvalidNumberError(field, 0, bound)
    return number


def validate_percentage(value: Any, field: str) -> float:
    """A percentage in ``[0, 100]``; a trailing ``%`` is accepted.

    >>> validate_percentage("4.5%", "Churn Rate")
    4.5
    """
    try:
        number = _coerce_float(value, field, 0, 100, percent=True)
    except InvalidNumberError:
        raise InvalidPercentageError(field) from None
    if not 0 <= number <= 100:
        raise InvalidPercentageError(field)
    return number


def serial_to_date(serial: float, field: str = "Date") -> date:
    """Convert a spreadsheet serial day-count to a calendar date.

    >>> serial_to_date(45292)
    datetime.date(2024, 1, 1)
    """
    if not math.isfinite(serial) or not 0 <= serial <= MAX_SERIAL_DAY:
        raise InvalidDateError(field, serial)
    return (SERIAL_EPOCH + timedelta(days=serial)).date()


def validate_date(value: Any, field: str = "Date", max_length: int = DEFAULT_DATE_MAX_LENGTH) -> date:
    """Accept a date/datetime, a serial day-count, or a parseable date string.

    Strings are truncated to *max_length* characters before parsing. A purely
    numeric string is read as a serial day-count.

    >>> validate_date("2024-02-01")
    datetime.date(2024, 2, 1)
    >>> validate_date(45323.0)
    datetime.date(2024, 2, 1)
    """
    if value is None:
        raise MissingDateError(field)
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        raise InvalidDateError(field, value)
    if isinstance(value, (int, float)):
        return serial_to_date(float(value), field)
    if not isinstance(value, str):
        raise InvalidDateError(field, value)

    text = value[:max_length].strip()
    if not text:
        raise MissingDateError(field)
    if _SERIAL_RE.match(text):
        return serial_to_date(float(text), field)
    try:
        return date_parser.parse(text, default=datetime(2000, 1, 1)).date()
    except (ValueError, OverflowError):
        raise InvalidDateError(field, text) from None
