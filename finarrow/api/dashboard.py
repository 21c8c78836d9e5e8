"""Dashboard endpoints: KPI snapshot, trends and chart series.

Sessions without uploaded data get the demo dataset, flagged with
``isDemo`` on the full view.
"""

from typing import List

from fastapi import APIRouter, Depends

from finarrow.dependencies import get_facade, get_session_store
from finarrow.facade import DashboardFacade
from finarrow.schemas.kpi import ChartPoint, DashboardView, KPIMetrics
from finarrow.services.session_store import SessionStore

router = APIRouter()


@router.get("", response_model=DashboardView, response_model_by_alias=True)
def get_dashboard(
    facade: DashboardFacade = Depends(get_facade),
    store: SessionStore = Depends(get_session_store),
) -> DashboardView:
    return facade.dashboard(store)


@router.get("/kpis", response_model=KPIMetrics, response_model_by_alias=True)
def get_kpis(
    facade: DashboardFacade = Depends(get_facade),
    store: SessionStore = Depends(get_session_store),
) -> KPIMetrics:
    return facade.kpis(store)


@router.get("/chart", response_model=List[ChartPoint], response_model_by_alias=True)
def get_chart(
    facade: DashboardFacade = Depends(get_facade),
    store: SessionStore = Depends(get_session_store),
) -> List[ChartPoint]:
    return facade.chart(store)
