"""Dashboard facade: single entry point for all external interfaces.

FastAPI, Streamlit and the CLI use this instead of wiring up engines and
services directly. Callers own the session: every per-session operation takes
the :class:`SessionStore` to read from or write to.

Usage::

    facade = DashboardFacade()              # uses Settings() from env / .env
    store = SessionStore({})
    facade.upload("metrics.xlsx", data, store)
    view = facade.dashboard(store)
"""

from datetime import date
from pathlib import Path
from typing import Callable, Optional

from finarrow.clients.llm_client import LLMClient
from finarrow.config import Settings
from finarrow.engines.kpi_engine import KPIEngine
from finarrow.engines.spreadsheet_parser import SpreadsheetParser
from finarrow.engines.template_builder import TemplateBuilder
from finarrow.logging_config import get_logger
from finarrow.prompts.manager import PromptManager
from finarrow.schemas.api import UploadResponse
from finarrow.schemas.financial_data import FinancialPeriodRecord
from finarrow.schemas.kpi import ChartPoint, DashboardView, KPIMetrics
from finarrow.services.dashboard_service import DashboardService
from finarrow.services.ingestion_service import IngestionService
from finarrow.services.insight_service import InsightService
from finarrow.services.report_service import HtmlToPdf, ReportService, weasyprint_renderer
from finarrow.services.session_store import SessionStore

logger = get_logger(__name__)


class DashboardFacade:
    """High-level API for upload → KPIs → insights → report.

    Returns only Pydantic schemas, bytes and plain strings.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        llm_client: Optional[LLMClient] = None,
        pdf_renderer: HtmlToPdf = weasyprint_renderer,
        today: Callable[[], date] = date.today,
    ):
        self._settings = s = settings or Settings()

        self.parser = SpreadsheetParser(
            max_rows=s.max_rows,
            numeric_bound=s.numeric_bound,
            date_max_length=s.date_max_length,
        )
        self.engine = KPIEngine(
            runway_sentinel_months=s.runway_sentinel_months,
            days_per_month=s.days_per_month,
            ltv_lifetime_years=s.ltv_lifetime_years,
        )
        self.ingestion = IngestionService(
            self.parser,
            max_upload_bytes=s.max_upload_bytes,
            allowed_extensions=s.allowed_extensions,
        )
        self.dashboards = DashboardService(self.engine, today=today)
        self.llm = llm_client or LLMClient(
            api_key=s.anthropic_api_key,
            model=s.claude_model,
            max_tokens=s.insights_max_tokens,
            temperature=s.insights_temperature,
        )
        self.insights_service = InsightService(self.llm, PromptManager())
        self.reports = ReportService(pdf_renderer, sentinel_months=s.runway_sentinel_months)

    @property
    def settings(self) -> Settings:
        return self._settings

    def new_store(self, backend: dict) -> SessionStore:
        return SessionStore(backend, key=self._settings.session_data_key)

    # ══════════════════════════════════════════════════════════════════
    # UPLOAD
    # ══════════════════════════════════════════════════════════════════

    def check_upload(self, filename: str, size: int) -> None:
        """Reject an upload by its declared size and name, before reading it."""
        self.ingestion.check_file(filename, size)

    def upload(self, filename: str, file_bytes: bytes, store: SessionStore) -> UploadResponse:
        """Parse an upload and make it the session's data.

        Raises:
            SpreadsheetError: any rejection, with a user-facing ``message``.
        """
        records = self.ingestion.ingest(filename, file_bytes, store)
        return _upload_summary(filename, records)

    def load_sample(self, store: SessionStore) -> UploadResponse:
        records = self.ingestion.load_sample(store)
        return _upload_summary("sample", records)

    def clear(self, store: SessionStore) -> None:
        store.clear()
        logger.info("session_data_cleared")

    def template(self) -> bytes:
        return TemplateBuilder().build()

    # ══════════════════════════════════════════════════════════════════
    # READ-ONLY QUERIES
    # ══════════════════════════════════════════════════════════════════

    def dashboard(self, store: SessionStore) -> DashboardView:
        return self.dashboards.view_for(store)

    def kpis(self, store: SessionStore) -> KPIMetrics:
        return self.dashboards.kpis(store)

    def chart(self, store: SessionStore) -> list[ChartPoint]:
        records, _ = self.dashboards.records_for(store)
        return self.engine.chart_series(records)

    def analyze_file(self, path: Path) -> DashboardView:
        """Parse a file on disk and build its dashboard view (no session)."""
        path = Path(path)
        file_bytes = path.read_bytes()
        self.ingestion.check_file(path.name, len(file_bytes))
        records = self.parser.parse(file_bytes)
        return self.dashboards.build_view(records)

    # ══════════════════════════════════════════════════════════════════
    # INSIGHTS & REPORTS
    # ══════════════════════════════════════════════════════════════════

    def insights(self, store: SessionStore) -> str:
        """AI commentary on the session's KPIs.

        Raises:
            InsightsError: the LLM is unavailable or rate-limited.
        """
        return self.insights_service.generate(self.kpis(store))

    def report_pdf(self, store: SessionStore, insights: Optional[str] = None) -> bytes:
        return self.reports.export_pdf(self.kpis(store), insights=insights)


def _upload_summary(filename: str, records: list[FinancialPeriodRecord]) -> UploadResponse:
    dates = [r.date for r in records]
    return UploadResponse(
        filename=filename,
        record_count=len(records),
        first_period=min(dates),
        last_period=max(dates),
    )
