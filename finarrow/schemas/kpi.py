"""KPI snapshot, chart projection and dashboard view schemas."""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class KPIMetrics(BaseModel):
    """Point-in-time KPIs with month-over-month percentage changes."""

    mrr: float
    mrr_change: float
    cac: float
    cac_change: float
    churn_rate: float
    churn_change: float
    burn_rate: float  # net: cash out - cash in
    burn_rate_change: float
    runway: float  # days
    runway_months: float
    ltv_cac_ratio: float
    ltv_cac_change: float
    arpu: float
    arpu_change: float

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class ChartPoint(BaseModel):
    date: dt.date
    label: str  # "Jan 24"
    mrr: float
    burn: float

    model_config = {"frozen": True}


class KPITrend(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class DashboardView(BaseModel):
    """Everything the dashboard renders for one session."""

    kpis: KPIMetrics
    trends: dict[str, KPITrend]
    chart: list[ChartPoint]
    cash_zero_date: Optional[dt.date] = None
    is_demo: bool = False
    record_count: int

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
