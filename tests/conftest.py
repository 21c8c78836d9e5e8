"""Shared test fixtures.

Spreadsheet fixtures are built in memory (openpyxl / csv text), so every test
gets fresh bytes and nothing touches the filesystem.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest

from finarrow.config import Settings
from finarrow.facade import DashboardFacade
from finarrow.schemas.financial_data import FinancialPeriodRecord
from finarrow.services.session_store import SessionStore
from tests.helpers import FEB_ROW, JAN_ROW, make_csv, make_xlsx


# ── Records ──────────────────────────────────────────────────────────────

@pytest.fixture()
def jan_record() -> FinancialPeriodRecord:
    return FinancialPeriodRecord(
        date=date(2024, 1, 1), revenue=50000, operating_expenses=30000,
        customer_count=100, churn_rate=5, cash_in=55000, cash_out=35000,
        cash_balance=200000,
    )


@pytest.fixture()
def feb_record() -> FinancialPeriodRecord:
    return FinancialPeriodRecord(
        date=date(2024, 2, 1), revenue=55000, operating_expenses=32000,
        customer_count=110, churn_rate=4.5, cash_in=60000, cash_out=37000,
        cash_balance=223000,
    )


@pytest.fixture()
def scenario_records(jan_record, feb_record) -> list[FinancialPeriodRecord]:
    """Two cash-positive months; Feb is the current period."""
    return [jan_record, feb_record]


@pytest.fixture()
def burning_records() -> list[FinancialPeriodRecord]:
    """Two months spending more cash than comes in."""
    return [
        FinancialPeriodRecord(
            date=date(2024, 1, 1), revenue=20000, operating_expenses=40000,
            customer_count=50, churn_rate=3, cash_in=20000, cash_out=50000,
            cash_balance=300000,
        ),
        FinancialPeriodRecord(
            date=date(2024, 2, 1), revenue=22000, operating_expenses=42000,
            customer_count=55, churn_rate=2.5, cash_in=22000, cash_out=52000,
            cash_balance=270000,
        ),
    ]


@pytest.fixture()
def scenario_xlsx() -> bytes:
    return make_xlsx([JAN_ROW, FEB_ROW])


@pytest.fixture()
def scenario_csv() -> bytes:
    return make_csv([JAN_ROW, FEB_ROW])


# ── Services ─────────────────────────────────────────────────────────────

@pytest.fixture()
def store() -> SessionStore:
    return SessionStore({})


@pytest.fixture()
def settings() -> Settings:
    return Settings(anthropic_api_key="", _env_file=None)


@pytest.fixture()
def mock_llm() -> MagicMock:
    llm = MagicMock()
    llm.model = "claude-test"
    llm.configured = True
    llm.complete.return_value = "Revenue grew 10% month over month."
    return llm


@pytest.fixture()
def pdf_renderer() -> MagicMock:
    return MagicMock(return_value=b"%PDF-1.7 stub")


@pytest.fixture()
def facade(settings, mock_llm, pdf_renderer) -> DashboardFacade:
    return DashboardFacade(
        settings=settings,
        llm_client=mock_llm,
        pdf_renderer=pdf_renderer,
        today=lambda: date(2024, 7, 1),
    )
