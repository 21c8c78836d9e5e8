"""Builds the dashboard view for a session."""

from datetime import date
from typing import Callable, Sequence

from finarrow.domain.sample_data import DEMO_RECORDS
from finarrow.domain.trends import cash_zero_date, compute_trends
from finarrow.engines.kpi_engine import KPIEngine
from finarrow.logging_config import get_logger
from finarrow.schemas.financial_data import FinancialPeriodRecord
from finarrow.schemas.kpi import DashboardView, KPIMetrics
from finarrow.services.session_store import SessionStore

logger = get_logger(__name__)


class DashboardService:
    def __init__(
        self,
        engine: KPIEngine,
        today: Callable[[], date] = date.today,
    ):
        self.engine = engine
        self._today = today

    def records_for(self, store: SessionStore) -> tuple[list[FinancialPeriodRecord], bool]:
        """Stored records, or the demo dataset. Returns ``(records, is_demo)``."""
        records = store.load_records()
        if records:
            return records, False
        return list(DEMO_RECORDS), True

    def kpis(self, store: SessionStore) -> KPIMetrics:
        records, _ = self.records_for(store)
        return self.engine.compute(records)

    def build_view(self, records: Sequence[FinancialPeriodRecord], is_demo: bool = False) -> DashboardView:
        kpis = self.engine.compute(records)
        view = DashboardView(
            kpis=kpis,
            trends=compute_trends(kpis),
            chart=self.engine.chart_series(records),
            cash_zero_date=cash_zero_date(kpis, self._today(), self.engine.days_per_month),
            is_demo=is_demo,
            record_count=len(records),
        )
        logger.info(
            "kpis_computed",
            records=len(records),
            is_demo=is_demo,
            mrr=kpis.mrr,
            runway_months=round(kpis.runway_months, 1),
        )
        return view

    def view_for(self, store: SessionStore) -> DashboardView:
        records, is_demo = self.records_for(store)
        return self.build_view(records, is_demo=is_demo)
