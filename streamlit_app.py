"""FinArrow: Streamlit UI.

Run locally:
    streamlit run streamlit_app.py --server.port 8501

Access: http://localhost:8501
"""

import sys
from pathlib import Path

# Ensure project root is importable
sys.path.insert(0, str(Path(__file__).resolve().parent))

import plotly.graph_objects as go
import streamlit as st

from finarrow.config import get_settings
from finarrow.domain.errors import InsightsError, SpreadsheetError
from finarrow.engines.template_builder import TEMPLATE_FILENAME
from finarrow.facade import DashboardFacade
from finarrow.logging_config import get_logger, is_configured, setup_logging
from finarrow.schemas.kpi import DashboardView, KPITrend
from finarrow.services.report_service import REPORT_FILENAME, report_rows
from finarrow.utils.financial_math import signed_percent

# ── Setup ────────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="FinArrow",
    page_icon="📈",
    layout="wide",
)

st.markdown("""
<style>
    .block-container {
        padding-top: 2rem;
        max-width: 1400px;
    }

    .trend-badge {
        display: inline-block;
        padding: 2px 10px;
        border-radius: 6px;
        font-weight: 600;
        font-size: 12px;
    }
    .trend-up { background: #d1fae5; color: #065f46; }
    .trend-neutral { background: #fef3c7; color: #92400e; }
    .trend-down { background: #fee2e2; color: #991b1b; }

    h1 { color: #0f172a; font-weight: 700; }
    h2 { color: #1e293b; font-weight: 600; margin-top: 2rem; }
</style>
""", unsafe_allow_html=True)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

TREND_LABELS = {
    KPITrend.UP: ("↑ Healthy", "trend-up"),
    KPITrend.NEUTRAL: ("→ Watch", "trend-neutral"),
    KPITrend.DOWN: ("↓ At risk", "trend-down"),
}


@st.cache_resource
def get_facade() -> DashboardFacade:
    """One facade per server process; session data lives in st.session_state."""
    settings = get_settings()
    if not is_configured():
        setup_logging(json_logs=settings.json_logs, log_level=settings.log_level)
    return DashboardFacade(settings=settings)


facade = get_facade()
store = facade.new_store(st.session_state)
logger = get_logger("streamlit_app")


# ── Helpers ──────────────────────────────────────────────────────────────


def trend_badge_html(trend: KPITrend) -> str:
    label, css = TREND_LABELS[trend]
    return f'<span class="trend-badge {css}">{label}</span>'


def kpi_card(column, title: str, value: str, change, trend: KPITrend, lower_is_better: bool = False):
    """A metric card; the delta arrow is coloured green when the move is good."""
    with column:
        st.metric(
            title,
            value,
            delta=signed_percent(change) if change is not None else None,
            delta_color="inverse" if lower_is_better else "normal",
        )
        st.markdown(trend_badge_html(trend), unsafe_allow_html=True)


def runway_display(view: DashboardView) -> str:
    if view.kpis.runway_months >= facade.settings.runway_sentinel_months:
        return "Cash-flow positive"
    return f"{view.kpis.runway_months:.1f} mo"


def build_mrr_chart(view: DashboardView) -> go.Figure:
    labels = [p.label for p in view.chart]
    fig = go.Figure(
        go.Scatter(
            x=labels,
            y=[p.mrr for p in view.chart],
            mode="lines+markers",
            line={"color": "#2563eb", "width": 3},
            name="MRR",
        )
    )
    fig.update_layout(
        title="Monthly Recurring Revenue",
        yaxis_tickprefix="$",
        margin={"l": 10, "r": 10, "t": 40, "b": 10},
        height=320,
    )
    return fig


def build_burn_chart(view: DashboardView) -> go.Figure:
    burns = [p.burn for p in view.chart]
    fig = go.Figure(
        go.Bar(
            x=[p.label for p in view.chart],
            y=burns,
            marker_color=["#dc2626" if b > 0 else "#059669" for b in burns],
            name="Net burn",
        )
    )
    fig.update_layout(
        title="Net Burn (cash out - cash in)",
        yaxis_tickprefix="$",
        margin={"l": 10, "r": 10, "t": 40, "b": 10},
        height=320,
    )
    return fig


def handle_upload(uploaded) -> None:
    """Parse a newly selected file once; reruns with the same file are no-ops."""
    upload_key = (uploaded.name, uploaded.size)
    if st.session_state.get("last_upload") == upload_key:
        return
    st.session_state["last_upload"] = upload_key
    try:
        summary = facade.upload(uploaded.name, uploaded.getvalue(), store)
    except SpreadsheetError as exc:
        st.session_state["upload_error"] = exc.message
        return
    st.session_state.pop("upload_error", None)
    st.session_state.pop("insights", None)
    st.session_state["upload_notice"] = (
        f"Loaded {summary.record_count} months "
        f"({summary.first_period:%b %Y} – {summary.last_period:%b %Y})."
    )


# ── Sidebar: data input ──────────────────────────────────────────────────

with st.sidebar:
    st.markdown("## Your data")
    uploaded = st.file_uploader(
        "Upload monthly financials",
        type=["xlsx", "csv"],
        help="One row per month. Required column: Date. Max 1000 rows, 10MB.",
    )
    if uploaded is not None:
        handle_upload(uploaded)

    if st.session_state.get("upload_error"):
        st.error(st.session_state["upload_error"])
    elif st.session_state.get("upload_notice"):
        st.success(st.session_state["upload_notice"])

    if st.button("Use sample data", use_container_width=True):
        summary = facade.load_sample(store)
        st.session_state.pop("insights", None)
        st.session_state.pop("upload_error", None)
        st.session_state["upload_notice"] = f"Loaded {summary.record_count} months of sample data."
        st.rerun()

    st.download_button(
        "Download template",
        data=facade.template(),
        file_name=TEMPLATE_FILENAME,
        mime=XLSX_MEDIA_TYPE,
        use_container_width=True,
    )

    if store.has_records() and st.button("Clear data", use_container_width=True):
        facade.clear(store)
        for key in ("insights", "upload_notice", "upload_error", "last_upload", "report_pdf"):
            st.session_state.pop(key, None)
        st.rerun()


# ── Dashboard ────────────────────────────────────────────────────────────

view = facade.dashboard(store)
kpis = view.kpis
trends = {k: KPITrend(v) for k, v in view.trends.items()}

st.markdown("# FinArrow")
st.caption("SaaS KPIs from your monthly financials")

if view.is_demo:
    st.info("Showing demo data. Upload a spreadsheet or load the sample data to see your own numbers.")

row1 = st.columns(4)
kpi_card(row1[0], "MRR", f"${kpis.mrr:,.0f}", kpis.mrr_change, trends["mrr"])
kpi_card(row1[1], "CAC", f"${kpis.cac:,.2f}", kpis.cac_change, trends["cac"], lower_is_better=True)
kpi_card(row1[2], "Churn Rate", f"{kpis.churn_rate:.1f}%", kpis.churn_change, trends["churn_rate"], lower_is_better=True)
kpi_card(row1[3], "Net Burn", f"${kpis.burn_rate:,.0f}", kpis.burn_rate_change, trends["burn_rate"], lower_is_better=True)

row2 = st.columns(4)
kpi_card(row2[0], "Runway", runway_display(view), None, trends["runway"])
kpi_card(row2[1], "LTV/CAC", f"{kpis.ltv_cac_ratio:.2f}x", kpis.ltv_cac_change, trends["ltv_cac_ratio"])
kpi_card(row2[2], "ARPU", f"${kpis.arpu:,.2f}", kpis.arpu_change, trends["arpu"])
with row2[3]:
    if view.cash_zero_date:
        st.metric("Cash Zero Date", f"{view.cash_zero_date:%d %b %Y}")
    else:
        st.metric("Cash Zero Date", "—")

st.markdown("---")

chart_left, chart_right = st.columns(2)
chart_left.plotly_chart(build_mrr_chart(view), use_container_width=True)
chart_right.plotly_chart(build_burn_chart(view), use_container_width=True)

st.markdown("## Metrics")
st.dataframe(
    [
        {
            "Metric": label,
            "Current Value": value,
            "MoM Change": signed_percent(change) if change is not None else "—",
        }
        for label, value, change, _ in report_rows(kpis, facade.settings.runway_sentinel_months)
    ],
    use_container_width=True,
    hide_index=True,
)


# ── Insights & report ────────────────────────────────────────────────────

st.markdown("## AI Insights")
if st.button("Generate insights"):
    with st.spinner("Analysing your metrics..."):
        try:
            st.session_state["insights"] = facade.insights(store)
        except InsightsError as exc:
            st.error(exc.message)

if st.session_state.get("insights"):
    # Escape dollar signs to prevent LaTeX rendering
    st.markdown(st.session_state["insights"].replace("$", r"\$"))

st.markdown("## Investor Report")
include_insights = st.checkbox(
    "Include AI insights",
    value=bool(st.session_state.get("insights")),
    disabled=not st.session_state.get("insights"),
)
if st.button("Prepare PDF"):
    with st.spinner("Rendering PDF..."):
        try:
            st.session_state["report_pdf"] = facade.report_pdf(
                store,
                insights=st.session_state.get("insights") if include_insights else None,
            )
        except (ImportError, OSError) as exc:
            logger.error("report_render_failed", error=str(exc))
            st.error("PDF export is unavailable: WeasyPrint or its system libraries are missing.")

if st.session_state.get("report_pdf"):
    st.download_button(
        "Download PDF",
        data=st.session_state["report_pdf"],
        file_name=REPORT_FILENAME,
        mime="application/pdf",
    )

st.caption("Simplified illustrative KPI model; not prepared under GAAP.")
