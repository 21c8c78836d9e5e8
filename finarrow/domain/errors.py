"""Error taxonomy for ingestion, KPI computation and insight generation.

Every ingestion error carries a ``message`` that can be shown verbatim to the
person who uploaded the file.
"""

from typing import Any, Optional


# ══════════════════════════════════════════════════════════════════════════
# SPREADSHEET INGESTION
# ══════════════════════════════════════════════════════════════════════════


class SpreadsheetError(Exception):
    """Base class for every reason an upload is rejected."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyFileError(SpreadsheetError):
    def __init__(self, message: str = "No data found in file"):
        super().__init__(message)


class TooManyRowsError(SpreadsheetError):
    def __init__(self, row_count: int, limit: int):
        super().__init__(
            f"File contains {row_count} data rows; the maximum is {limit}."
        )
        self.row_count = row_count
        self.limit = limit


class UnsupportedFileError(SpreadsheetError):
    """The upload is the wrong type or size before any parsing happens."""


class CorruptFileError(SpreadsheetError):
    def __init__(
        self,
        message: str = "Failed to parse spreadsheet file. Please check the format.",
    ):
        super().__init__(message)


# ── Single-cell validation failures ───────────────────────────────────────


class FieldValidationError(ValueError):
    """A single cell failed validation. Wrapped in :class:`RowError`."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class MissingDateError(FieldValidationError):
    def __init__(self, field: str = "Date"):
        super().__init__(field, f"{field} is required")


class InvalidNumberError(FieldValidationError):
    def __init__(self, field: str, lower: float, upper: float):
        super().__init__(
            field,
            f"{field} must be a number between {lower:,.0f} and {upper:,.0f}",
        )
        self.lower = lower
        self.upper = upper


class InvalidPercentageError(FieldValidationError):
    def __init__(self, field: str):
        super().__init__(field, f"{field} must be a percentage between 0 and 100")


class InvalidDateError(FieldValidationError):
    def __init__(self, field: str, value: Any):
        super().__init__(field, f"{field} is not a valid date: {value!r}")
        self.value = value


class RowError(SpreadsheetError):
    """A cell in a data row failed validation; aborts the whole parse."""

    def __init__(self, row_number: int, field: str, reason: FieldValidationError):
        super().__init__(f"Row {row_number}: {reason.message}")
        self.row_number = row_number
        self.field = field
        self.reason = reason


# ══════════════════════════════════════════════════════════════════════════
# KPI COMPUTATION
# ══════════════════════════════════════════════════════════════════════════


class EmptyInputError(ValueError):
    def __init__(self, message: str = "No data available for calculations"):
        super().__init__(message)
        self.message = message


# ══════════════════════════════════════════════════════════════════════════
# INSIGHT GENERATION
# ══════════════════════════════════════════════════════════════════════════


class InsightsError(RuntimeError):
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InsightsUnavailableError(InsightsError):
    pass


class InsightsRateLimitedError(InsightsError):
    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again later.",
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, cause)
