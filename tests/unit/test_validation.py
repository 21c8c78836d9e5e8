"""Tests for cell validators."""

from datetime import date, datetime

import pytest

from finarrow.domain.errors import (
    InvalidDateError,
    InvalidNumberError,
    InvalidPercentageError,
    MissingDateError,
)
from finarrow.domain.validation import (
    serial_to_date,
    validate_date,
    validate_non_negative,
    validate_number,
    validate_percentage,
)


class TestValidateNumber:
    def test_accepts_int_and_float(self):
        assert validate_number(5, "Cash Balance") == 5.0
        assert validate_number(-2.5, "Cash Balance") == -2.5

    def test_accepts_formatted_string(self):
        assert validate_number(" -2,500 ", "Cash Balance") == -2500.0
        assert validate_number("$1,000", "Cash Balance") == 1000.0

    @pytest.mark.parametrize("value", [1e12, -1e12, 0, 123.456])
    def test_idempotent(self, value):
        once = validate_number(value, "Cash Balance")
        assert validate_number(once, "Cash Balance") == once

    @pytest.mark.parametrize("value", ["abc", "", "1e", True, None, float("nan"), float("inf"), [1]])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(InvalidNumberError) as exc_info:
            validate_number(value, "Cash Balance")
        assert exc_info.value.field == "Cash Balance"

    def test_rejects_out_of_bound(self):
        with pytest.raises(InvalidNumberError):
            validate_number(1e12 + 1, "Cash Balance")

    def test_custom_bound(self):
        with pytest.raises(InvalidNumberError):
            validate_number(101, "Cash Balance", bound=100)


class TestValidateNonNegative:
    def test_accepts_zero(self):
        assert validate_non_negative(0, "Revenue") == 0.0

    def test_rejects_negative(self):
        with pytest.raises(InvalidNumberError) as exc_info:
            validate_non_negative(-1, "Revenue")
        assert "Revenue" in exc_info.value.message

    def test_rejects_text(self):
        with pytest.raises(InvalidNumberError):
            validate_non_negative("abc", "Revenue")


class TestValidatePercentage:
    def test_range_ends(self):
        assert validate_percentage(0, "Churn Rate") == 0.0
        assert validate_percentage(100, "Churn Rate") == 100.0

    def test_trailing_percent_sign(self):
        assert validate_percentage("4.5%", "Churn Rate") == 4.5

    @pytest.mark.parametrize("value", [-0.1, 100.1, "lots"])
    def test_rejects(self, value):
        with pytest.raises(InvalidPercentageError):
            validate_percentage(value, "Churn Rate")


class TestValidateDate:
    def test_date_and_datetime(self):
        assert validate_date(date(2024, 1, 1)) == date(2024, 1, 1)
        assert validate_date(datetime(2024, 1, 1, 12, 30)) == date(2024, 1, 1)

    def test_iso_string(self):
        assert validate_date("2024-02-01") == date(2024, 2, 1)

    def test_free_form_string(self):
        assert validate_date("Mar 2024") == date(2024, 3, 1)

    def test_serial_number(self):
        assert validate_date(45292) == date(2024, 1, 1)
        assert validate_date(45323.0) == date(2024, 2, 1)

    def test_numeric_string_is_serial(self):
        assert validate_date("45292") == date(2024, 1, 1)

    def test_missing(self):
        with pytest.raises(MissingDateError):
            validate_date(None)
        with pytest.raises(MissingDateError):
            validate_date("   ")

    def test_unparseable(self):
        with pytest.raises(InvalidDateError) as exc_info:
            validate_date("not a date")
        assert exc_info.value.field == "Date"

    def test_truncates_long_strings(self):
        with pytest.raises(InvalidDateError) as exc_info:
            validate_date("x" * 500, max_length=50)
        assert len(exc_info.value.value) == 50

    def test_negative_serial_rejected(self):
        with pytest.raises(InvalidDateError):
            serial_to_date(-1)

    def test_bool_rejected(self):
        with pytest.raises(InvalidDateError):
            validate_date(True)
