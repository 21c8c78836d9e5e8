"""Service-layer orchestration modules."""

from finarrow.services.dashboard_service import DashboardService
from finarrow.services.ingestion_service import IngestionService
from finarrow.services.insight_service import InsightService
from finarrow.services.report_service import ReportService
from finarrow.services.session_store import SessionRegistry, SessionStore

__all__ = [
    "IngestionService",
    "DashboardService",
    "InsightService",
    "ReportService",
    "SessionStore",
    "SessionRegistry",
]
