"""Canonical spreadsheet schema and header aliases.

This is the **single source of truth** for:
- Canonical record fields and their display (template) header
- Accepted header aliases per field, in priority order
- The validation policy applied to each field

Usage:
    from finarrow.domain.columns import COLUMNS, resolve_cell

    for column in COLUMNS:
        raw = resolve_cell(row, column)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Tuple


class Policy(str, Enum):
    """Validation policy for a column."""

    DATE = "date"
    BOUNDED = "bounded"  # any finite number within ±bound
    NON_NEGATIVE = "non_negative"  # 0 <= x <= bound
    PERCENTAGE = "percentage"  # 0 <= x <= 100


@dataclass(frozen=True)
class ColumnSpec:
    """One canonical field and the headers it may be read from."""

    field: str  # FinancialPeriodRecord attribute
    aliases: Tuple[str, ...]  # first entry is the canonical header
    policy: Policy
    integer: bool = False

    @property
    def header(self) -> str:
        return self.aliases[0]


# ══════════════════════════════════════════════════════════════════════════
# COLUMN TABLE (consulted in order)
# ══════════════════════════════════════════════════════════════════════════

COLUMNS: Tuple[ColumnSpec, ...] = (
    ColumnSpec("date", ("Date", "Month"), Policy.DATE),
    ColumnSpec("revenue", ("Revenue", "MRR"), Policy.NON_NEGATIVE),
    ColumnSpec("operating_expenses", ("Operating Expenses", "Expenses"), Policy.NON_NEGATIVE),
    ColumnSpec("customer_count", ("Customer Count", "Customers"), Policy.NON_NEGATIVE, integer=True),
    ColumnSpec("churn_rate", ("Churn Rate", "Churn"), Policy.PERCENTAGE),
    ColumnSpec("cash_in", ("Cash In",), Policy.NON_NEGATIVE),
    ColumnSpec("cash_out", ("Cash Out",), Policy.NON_NEGATIVE),
    ColumnSpec("cash_balance", ("Cash Balance",), Policy.BOUNDED),
)

TEMPLATE_HEADERS: Tuple[str, ...] = tuple(c.header for c in COLUMNS)


# ══════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ══════════════════════════════════════════════════════════════════════════


def normalize_header(raw: Any) -> str:
    """Collapse whitespace and lowercase a header cell.

    >>> normalize_header("  Customer   COUNT ")
    'customer count'
    """
    if raw is None:
        return ""
    return " ".join(str(raw).split()).lower()


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def resolve_cell(row: Mapping[str, Any], column: ColumnSpec) -> Optional[Any]:
    """Return the first non-blank value among *column*'s aliases.

    Exact header matches win; a case/whitespace-insensitive match is the
    fallback for each alias before moving on to the next one.

    >>> resolve_cell({"MRR": 10}, COLUMNS[1])
    10
    >>> resolve_cell({"revenue": "", "mrr": 5}, COLUMNS[1])
    5
    >>> resolve_cell({}, COLUMNS[1]) is None
    True
    """
    folded = None
    for alias in column.aliases:
        if alias in row and not is_blank(row[alias]):
            return row[alias]
        if folded is None:
            folded = {}
            for key, value in row.items():
                folded.setdefault(normalize_header(key), value)
        value = folded.get(normalize_header(alias))
        if not is_blank(value):
            return value
    return None
