"""Financial period record schema."""

import datetime as dt

from pydantic import BaseModel, Field, TypeAdapter
from pydantic.alias_generators import to_camel

NUMERIC_BOUND = 1e12


class FinancialPeriodRecord(BaseModel):
    """One calendar period (usually a month) of a company's financials.

    Serialised with camelCase keys (``operatingExpenses``, ``cashBalance`` …)
    for the session hand-off.
    """

    date: dt.date
    revenue: float = Field(default=0.0, ge=0, le=NUMERIC_BOUND)
    operating_expenses: float = Field(default=0.0, ge=0, le=NUMERIC_BOUND)
    customer_count: int = Field(default=0, ge=0, le=NUMERIC_BOUND)
    churn_rate: float = Field(default=0.0, ge=0, le=100)  # percent
    cash_in: float = Field(default=0.0, ge=0, le=NUMERIC_BOUND)
    cash_out: float = Field(default=0.0, ge=0, le=NUMERIC_BOUND)
    cash_balance: float = Field(default=0.0, ge=-NUMERIC_BOUND, le=NUMERIC_BOUND)  # negative = overdraft

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @property
    def net_burn(self) -> float:
        """Cash out minus cash in; positive means spending exceeds income."""
        return self.cash_out - self.cash_in


RecordList = TypeAdapter(list[FinancialPeriodRecord])


def dump_records(records: list[FinancialPeriodRecord]) -> str:
    """Serialise *records* to the JSON stored under the session key."""
    return RecordList.dump_json(records, by_alias=True).decode("utf-8")


def load_records(payload: str | bytes) -> list[FinancialPeriodRecord]:
    return RecordList.validate_json(payload)
