"""Bundled datasets: the "try with sample data" upload and the dashboard demo.

The sample dataset is what a user gets when they opt into example data on the
upload page. The demo dataset is shown on the dashboard when nothing has been
uploaded in the session yet.
"""

from datetime import date

from finarrow.schemas.financial_data import FinancialPeriodRecord


def _record(d: date, revenue, opex, customers, churn, cash_in, cash_out, balance) -> FinancialPeriodRecord:
    return FinancialPeriodRecord(
        date=d,
        revenue=revenue,
        operating_expenses=opex,
        customer_count=customers,
        churn_rate=churn,
        cash_in=cash_in,
        cash_out=cash_out,
        cash_balance=balance,
    )


# Cash-flow positive, growing business.
SAMPLE_RECORDS: tuple[FinancialPeriodRecord, ...] = (
    _record(date(2024, 1, 1), 50000, 30000, 100, 5, 55000, 35000, 200000),
    _record(date(2024, 2, 1), 55000, 32000, 110, 4.5, 60000, 37000, 223000),
    _record(date(2024, 3, 1), 60000, 35000, 120, 4, 65000, 40000, 248000),
    _record(date(2024, 4, 1), 68000, 38000, 132, 3.8, 72000, 43000, 277000),
    _record(date(2024, 5, 1), 75000, 42000, 145, 3.5, 80000, 47000, 310000),
    _record(date(2024, 6, 1), 85000, 45000, 160, 3.2, 90000, 52000, 348000),
)

# Early-stage business still burning cash.
DEMO_RECORDS: tuple[FinancialPeriodRecord, ...] = (
    _record(date(2024, 1, 1), 45000, 35000, 120, 5, 42000, 55000, 95000),
    _record(date(2024, 2, 1), 48000, 38000, 135, 4, 46000, 52000, 89000),
    _record(date(2024, 3, 1), 52000, 40000, 150, 6, 50000, 54000, 85000),
    _record(date(2024, 4, 1), 55000, 42000, 165, 5, 53000, 51000, 87000),
    _record(date(2024, 5, 1), 61000, 45000, 185, 7, 58000, 53000, 92000),
    _record(date(2024, 6, 1), 68000, 48000, 210, 6, 65000, 55000, 102000),
)
