"""Pydantic schemas for request/response validation and domain types."""

from finarrow.schemas.api import HealthResponse, InsightsResponse, UploadErrorResponse, UploadResponse
from finarrow.schemas.financial_data import FinancialPeriodRecord
from finarrow.schemas.kpi import ChartPoint, DashboardView, KPIMetrics, KPITrend

__all__ = [
    "FinancialPeriodRecord",
    "KPIMetrics", "KPITrend", "ChartPoint", "DashboardView",
    "UploadResponse", "UploadErrorResponse", "InsightsResponse", "HealthResponse",
]
