"""Tests for ReportService: HTML rendering with a stub PDF renderer."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from finarrow.engines.kpi_engine import KPIEngine
from finarrow.services.report_service import ReportService, report_rows


@pytest.fixture()
def kpis(scenario_records):
    return KPIEngine().compute(scenario_records)


class TestReportRows:
    def test_cash_positive_runway(self, kpis):
        rows = dict((label, value) for label, value, _, _ in report_rows(kpis))
        assert rows["Runway"] == "Cash-flow positive"
        assert rows["Monthly Recurring Revenue"] == "$55,000"

    def test_burning_runway(self, burning_records):
        kpis = KPIEngine().compute(burning_records)
        rows = dict((label, value) for label, value, _, _ in report_rows(kpis))
        assert rows["Runway"] == "9.0 months (270 days)"


class TestRenderHtml:
    def test_contains_metrics_and_date(self, kpis):
        html = ReportService(company_name="Acme").render_html(kpis, generated_at=datetime(2024, 7, 1, 9, 30))
        assert "Acme - SaaS KPI Report" in html
        assert "Generated 01 Jul 2024 09:30" in html
        assert "$55,000" in html
        assert '<td class="pos">+10.0%</td>' in html

    def test_lower_is_better_colouring(self, kpis):
        html = ReportService().render_html(kpis)
        # CAC fell: good
        assert '<td>Customer Acquisition Cost</td><td>$290.91</td><td class="pos">' in html

    def test_escapes_company_name(self, kpis):
        html = ReportService(company_name="<script>").render_html(kpis)
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_insights_paragraphs(self, kpis):
        html = ReportService().render_html(kpis, insights="First point.\n\nSecond & last.")
        assert "<h2>Insights</h2><p>First point.</p><p>Second &amp; last.</p>" in html

    def test_no_insights_section_by_default(self, kpis):
        assert "<h2>Insights</h2>" not in ReportService().render_html(kpis)


class TestExportPdf:
    def test_uses_renderer(self, kpis):
        renderer = MagicMock(return_value=b"%PDF")
        pdf = ReportService(renderer=renderer).export_pdf(kpis, insights="Note.")
        assert pdf == b"%PDF"
        html = renderer.call_args.args[0]
        assert "<p>Note.</p>" in html
