"""Trend indicator rules for the KPI cards.

A trend says whether a metric is moving in a healthy direction, not whether
its number went up: a falling CAC is ``UP`` (good), a positive burn is
``DOWN`` (bad).

Usage:
    from finarrow.domain.trends import compute_trends, cash_zero_date

    trends = compute_trends(kpis)      # {"mrr": KPITrend.UP, ...}
    zero = cash_zero_date(kpis, today)
"""

from datetime import date, timedelta
from typing import Optional

from finarrow.schemas.kpi import KPIMetrics, KPITrend

# Churn above this percentage is flagged.
CHURN_ALERT_PERCENT = 1.0

# Runway thresholds in months: below CRITICAL is red, below WARNING amber.
RUNWAY_CRITICAL_MONTHS = 6
RUNWAY_WARNING_MONTHS = 12

# LTV/CAC ratio bands.
LTV_CAC_HEALTHY = 3.0
LTV_CAC_POOR = 2.0


def trend_from_change(change: float, higher_is_better: bool = True) -> KPITrend:
    """Trend from a MoM change.

    >>> trend_from_change(4.2)
    <KPITrend.UP: 'up'>
    >>> trend_from_change(4.2, higher_is_better=False)
    <KPITrend.DOWN: 'down'>
    >>> trend_from_change(0)
    <KPITrend.NEUTRAL: 'neutral'>
    """
    if change == 0:
        return KPITrend.NEUTRAL
    improving = change > 0 if higher_is_better else change < 0
    return KPITrend.UP if improving else KPITrend.DOWN


def churn_trend(churn_rate: float) -> KPITrend:
    return KPITrend.DOWN if churn_rate > CHURN_ALERT_PERCENT else KPITrend.UP


def burn_trend(burn_rate: float) -> KPITrend:
    return KPITrend.DOWN if burn_rate > 0 else KPITrend.UP


def runway_trend(runway_months: float) -> KPITrend:
    if runway_months < RUNWAY_CRITICAL_MONTHS:
        return KPITrend.DOWN
    if runway_months < RUNWAY_WARNING_MONTHS:
        return KPITrend.NEUTRAL
    return KPITrend.UP


def ltv_cac_trend(ratio: float) -> KPITrend:
    if ratio > LTV_CAC_HEALTHY:
        return KPITrend.UP
    if ratio < LTV_CAC_POOR:
        return KPITrend.DOWN
    return KPITrend.NEUTRAL


def compute_trends(kpis: KPIMetrics) -> dict[str, KPITrend]:
    """Trend indicator for every dashboard card."""
    return {
        "mrr": trend_from_change(kpis.mrr_change),
        "cac": trend_from_change(kpis.cac_change, higher_is_better=False),
        "churn_rate": churn_trend(kpis.churn_rate),
        "burn_rate": burn_trend(kpis.burn_rate),
        "runway": runway_trend(kpis.runway_months),
        "ltv_cac_ratio": ltv_cac_trend(kpis.ltv_cac_ratio),
        "arpu": trend_from_change(kpis.arpu_change),
    }


def cash_zero_date(kpis: KPIMetrics, today: date, days_per_month: int = 30) -> Optional[date]:
    """Projected date the cash balance reaches zero.

    ``None`` when the current period is not burning cash, or when the
    projection falls outside the representable calendar (a tiny burn against
    a large balance).

    >>> from datetime import date
    >>> k = KPIMetrics(mrr=0, mrr_change=0, cac=0, cac_change=0, churn_rate=0,
    ...     churn_change=0, burn_rate=1000, burn_rate_change=0, runway=60,
    ...     runway_months=2, ltv_cac_ratio=0, ltv_cac_change=0, arpu=0, arpu_change=0)
    >>> cash_zero_date(k, date(2024, 1, 1))
    datetime.date(2024, 3, 1)
    """
    if kpis.burn_rate <= 0:
        return None
    days = kpis.runway_months * days_per_month
    if not (date.min - today).days <= days <= (date.max - today).days:
        return None
    return today + timedelta(days=days)
