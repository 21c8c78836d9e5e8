"""KPI engine: turns a validated record sequence into a KPI snapshot.

The engine never raises on division by zero: ratios fall back to 0 and the
runway falls back to a sentinel month count when the business is not burning
cash. The only failure is an empty input.
"""

from typing import Sequence

from finarrow.domain.errors import EmptyInputError
from finarrow.schemas.financial_data import FinancialPeriodRecord
from finarrow.schemas.kpi import ChartPoint, KPIMetrics
from finarrow.utils.financial_math import mean, mom_change, safe_div


def sort_records(records: Sequence[FinancialPeriodRecord]) -> list[FinancialPeriodRecord]:
    """Return a chronologically sorted copy.

    The sort is stable: records sharing a date keep their input order, so the
    later-listed one is treated as the more recent.
    """
    return sorted(records, key=lambda r: r.date)


class KPIEngine:
    """Compute current-period KPIs and month-over-month deltas."""

    def __init__(
        self,
        runway_sentinel_months: float = 999.0,
        days_per_month: int = 30,
        ltv_lifetime_years: int = 3,
    ):
        self.runway_sentinel_months = runway_sentinel_months
        self.days_per_month = days_per_month
        self.ltv_lifetime_months = ltv_lifetime_years * 12

    # ── per-record formulas ──────────────────────────────────────────

    @staticmethod
    def cac(record: FinancialPeriodRecord) -> float:
        return safe_div(record.operating_expenses, record.customer_count)

    @staticmethod
    def arpu(record: FinancialPeriodRecord) -> float:
        return safe_div(record.revenue, record.customer_count)

    def ltv(self, record: FinancialPeriodRecord) -> float:
        return safe_div(record.revenue * self.ltv_lifetime_months, record.customer_count)

    def ltv_cac_ratio(self, record: FinancialPeriodRecord) -> float:
        return safe_div(self.ltv(record), self.cac(record))

    def runway_months(self, ordered: Sequence[FinancialPeriodRecord]) -> float:
        """Months of cash left at the average net burn across *ordered*."""
        average_burn = mean([r.net_burn for r in ordered])
        if average_burn <= 0:
            return self.runway_sentinel_months
        return ordered[-1].cash_balance / average_burn

    # ── public API ───────────────────────────────────────────────────

    def compute(self, records: Sequence[FinancialPeriodRecord]) -> KPIMetrics:
        """Compute the KPI snapshot for *records* (any order).

        Raises:
            EmptyInputError: when *records* is empty.
        """
        if not records:
            raise EmptyInputError()

        ordered = sort_records(records)
        current = ordered[-1]
        previous = ordered[-2] if len(ordered) > 1 else current

        cac = self.cac(current)
        ltv_cac = self.ltv_cac_ratio(current)
        arpu = self.arpu(current)
        runway_months = self.runway_months(ordered)

        return KPIMetrics(
            mrr=current.revenue,
            mrr_change=mom_change(current.revenue, previous.revenue),
            cac=cac,
            cac_change=mom_change(cac, self.cac(previous)),
            churn_rate=current.churn_rate,
            churn_change=mom_change(current.churn_rate, previous.churn_rate),
            burn_rate=current.net_burn,
            burn_rate_change=mom_change(current.net_burn, previous.net_burn),
            runway=runway_months * self.days_per_month,
            runway_months=runway_months,
            ltv_cac_ratio=ltv_cac,
            ltv_cac_change=mom_change(ltv_cac, self.ltv_cac_ratio(previous)),
            arpu=arpu,
            arpu_change=mom_change(arpu, self.arpu(previous)),
        )

    def chart_series(self, records: Sequence[FinancialPeriodRecord]) -> list[ChartPoint]:
        """Project the sorted records onto (date, revenue, net burn) points."""
        return [
            ChartPoint(
                date=r.date,
                label=r.date.strftime("%b %y"),
                mrr=r.revenue,
                burn=r.net_burn,
            )
            for r in sort_records(records)
        ]


def compute_kpis(records: Sequence[FinancialPeriodRecord]) -> KPIMetrics:
    """Compute KPIs with the default model constants."""
    return KPIEngine().compute(records)
