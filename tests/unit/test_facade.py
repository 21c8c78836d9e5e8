"""Tests for DashboardFacade: the single entry point for API, UI and CLI.

External collaborators (LLM, PDF renderer) are mocked; everything else is real.
"""

from datetime import date

import pytest

from finarrow.config import Settings
from finarrow.domain.errors import RowError, TooManyRowsError, UnsupportedFileError
from finarrow.facade import DashboardFacade
from tests.helpers import JAN_ROW, make_csv


class TestUpload:
    def test_upload_summary(self, facade, store, scenario_xlsx):
        summary = facade.upload("metrics.xlsx", scenario_xlsx, store)
        assert summary.record_count == 2
        assert summary.first_period == date(2024, 1, 1)
        assert summary.last_period == date(2024, 2, 1)
        assert facade.dashboard(store).kpis.mrr == 55000

    def test_upload_error(self, facade, store):
        bad = make_csv([("2024-01-01", "abc", 0, 0, 0, 0, 0, 0)])
        with pytest.raises(RowError):
            facade.upload("bad.csv", bad, store)
        assert facade.dashboard(store).is_demo

    def test_max_rows_from_settings(self, mock_llm, pdf_renderer, store):
        facade = DashboardFacade(
            settings=Settings(max_rows=3, _env_file=None),
            llm_client=mock_llm,
            pdf_renderer=pdf_renderer,
        )
        with pytest.raises(TooManyRowsError):
            facade.upload("big.csv", make_csv([JAN_ROW] * 4), store)

    def test_sample_and_clear(self, facade, store):
        assert facade.load_sample(store).record_count == 6
        assert not facade.dashboard(store).is_demo
        facade.clear(store)
        assert facade.dashboard(store).is_demo

    def test_new_store_uses_settings_key(self, facade):
        backend = {}
        facade.load_sample(facade.new_store(backend))
        assert "financialData" in backend

    def test_check_upload_rejects_declared_size(self, facade):
        with pytest.raises(UnsupportedFileError, match="exceeds 10MB"):
            facade.check_upload("metrics.xlsx", 11 * 1024 * 1024)
        facade.check_upload("metrics.xlsx", 1024)


class TestQueries:
    def test_chart(self, facade, store, scenario_xlsx):
        facade.upload("metrics.xlsx", scenario_xlsx, store)
        assert [p.label for p in facade.chart(store)] == ["Jan 24", "Feb 24"]

    def test_template_parses(self, facade, store):
        summary = facade.upload("FinArrow_Template.xlsx", facade.template(), store)
        assert summary.record_count == 3

    def test_analyze_file(self, facade, tmp_path, scenario_csv):
        path = tmp_path / "metrics.csv"
        path.write_bytes(scenario_csv)
        view = facade.analyze_file(path)
        assert view.kpis.mrr == 55000
        assert not view.is_demo


class TestInsightsAndReports:
    def test_insights(self, facade, store, mock_llm):
        assert facade.insights(store) == "Revenue grew 10% month over month."
        mock_llm.complete.assert_called_once()

    def test_report_pdf(self, facade, store, pdf_renderer):
        assert facade.report_pdf(store, insights="Note.") == b"%PDF-1.7 stub"
        assert "<p>Note.</p>" in pdf_renderer.call_args.args[0]
