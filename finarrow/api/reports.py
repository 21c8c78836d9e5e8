"""Report endpoints: AI insights and the investor PDF.

LLM failures map to 503 (unavailable) or 429 (rate limited) in
``finarrow.main``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from finarrow.dependencies import get_facade, get_session_store
from finarrow.facade import DashboardFacade
from finarrow.logging_config import get_logger
from finarrow.schemas.api import InsightsResponse
from finarrow.services.report_service import REPORT_FILENAME
from finarrow.services.session_store import SessionStore

logger = get_logger(__name__)
router = APIRouter()


@router.post("/insights", response_model=InsightsResponse)
def generate_insights(
    facade: DashboardFacade = Depends(get_facade),
    store: SessionStore = Depends(get_session_store),
) -> InsightsResponse:
    """Commentary on the current KPIs from Claude.

    Raises:
        InsightsError: translated to 503 / 429 by the app's handlers.
    """
    return InsightsResponse(insights=facade.insights(store))


@router.get("/pdf")
def download_report(
    include_insights: bool = Query(False, description="Append AI commentary to the report"),
    facade: DashboardFacade = Depends(get_facade),
    store: SessionStore = Depends(get_session_store),
) -> Response:
    insights: Optional[str] = facade.insights(store) if include_insights else None
    logger.info("report_requested", include_insights=include_insights)
    pdf = facade.report_pdf(store, insights=insights)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
    )
