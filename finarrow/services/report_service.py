"""Investor report export: KPI snapshot → HTML → PDF.

PDF rendering uses WeasyPrint, imported on first use because it needs the
system Pango libraries; the renderer can be replaced (tests pass a stub).
"""

from datetime import datetime
from html import escape
from typing import Callable, Optional

from finarrow.logging_config import get_logger
from finarrow.schemas.kpi import KPIMetrics
from finarrow.utils.financial_math import signed_percent

logger = get_logger(__name__)

REPORT_FILENAME = "FinArrow_Investor_Report.pdf"

HtmlToPdf = Callable[[str], bytes]


def weasyprint_renderer(html: str) -> bytes:
    from weasyprint import HTML

    return HTML(string=html).write_pdf()


_STYLE = """
body { font-family: Helvetica, Arial, sans-serif; color: #0f172a; margin: 2.5rem; }
h1 { font-size: 22pt; margin-bottom: 0.2rem; }
.meta { color: #64748b; font-size: 9pt; margin-bottom: 1.5rem; }
table { width: 100%; border-collapse: collapse; font-size: 10pt; }
th, td { padding: 6px 8px; border-bottom: 1px solid #e2e8f0; text-align: right; }
th:first-child, td:first-child { text-align: left; }
.pos { color: #047857; } .neg { color: #b91c1c; }
.note { margin-top: 1.5rem; font-size: 9pt; color: #64748b; }
"""


def report_rows(kpis: KPIMetrics, sentinel_months: float = 999.0) -> list[tuple[str, str, Optional[float], bool]]:
    """``(label, value, mom_change, higher_is_better)`` per table row."""
    if kpis.runway_months >= sentinel_months:
        runway = "Cash-flow positive"
    else:
        runway = f"{kpis.runway_months:.1f} months ({kpis.runway:,.0f} days)"
    return [
        ("Monthly Recurring Revenue", f"${kpis.mrr:,.0f}", kpis.mrr_change, True),
        ("Customer Acquisition Cost", f"${kpis.cac:,.2f}", kpis.cac_change, False),
        ("Churn Rate", f"{kpis.churn_rate:.1f}%", kpis.churn_change, False),
        ("Net Burn Rate", f"${kpis.burn_rate:,.0f}", kpis.burn_rate_change, False),
        ("Runway", runway, None, True),
        ("LTV/CAC Ratio", f"{kpis.ltv_cac_ratio:.2f}", kpis.ltv_cac_change, True),
        ("ARPU", f"${kpis.arpu:,.2f}", kpis.arpu_change, True),
    ]


class ReportService:
    def __init__(
        self,
        renderer: HtmlToPdf = weasyprint_renderer,
        company_name: str = "Your Company",
        sentinel_months: float = 999.0,
    ):
        self.renderer = renderer
        self.company_name = company_name
        self.sentinel_months = sentinel_months

    def render_html(self, kpis: KPIMetrics, generated_at: Optional[datetime] = None, insights: Optional[str] = None) -> str:
        generated_at = generated_at or datetime.now()
        body_rows = []
        for label, value, change, higher_is_better in report_rows(kpis, self.sentinel_months):
            if change is None:
                change_cell = "<td>-</td>"
            else:
                good = change > 0 if higher_is_better else change < 0
                css = "" if change == 0 else ("pos" if good else "neg")
                change_cell = f'<td class="{css}">{signed_percent(change)}</td>'
            body_rows.append(f"<tr><td>{escape(label)}</td><td>{escape(value)}</td>{change_cell}</tr>")

        insights_html = ""
        if insights:
            paragraphs = "".join(f"<p>{escape(p)}</p>" for p in insights.split("\n\n") if p.strip())
            insights_html = f"<h2>Insights</h2>{paragraphs}"

        return (
            "<!DOCTYPE html><html><head><meta charset='utf-8'>"
            f"<title>{escape(self.company_name)} - SaaS KPI Report</title>"
            f"<style>{_STYLE}</style></head><body>"
            f"<h1>{escape(self.company_name)} - SaaS KPI Report</h1>"
            f"<div class='meta'>Generated {generated_at:%d %b %Y %H:%M}</div>"
            "<table><thead><tr><th>Metric</th><th>Current Value</th><th>MoM Change</th></tr></thead>"
            f"<tbody>{''.join(body_rows)}</tbody></table>"
            f"{insights_html}"
            "<p class='note'>Simplified illustrative KPI model; not prepared under GAAP.</p>"
            "</body></html>"
        )

    def export_pdf(self, kpis: KPIMetrics, insights: Optional[str] = None) -> bytes:
        html = self.render_html(kpis, insights=insights)
        pdf = self.renderer(html)
        logger.info("report_exported", bytes=len(pdf), with_insights=bool(insights))
        return pdf
