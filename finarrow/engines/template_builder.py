"""Generates the downloadable upload template workbook."""

import io
from datetime import date
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from finarrow.domain.columns import COLUMNS
from finarrow.schemas.financial_data import FinancialPeriodRecord

TEMPLATE_FILENAME = "FinArrow_Template.xlsx"
TEMPLATE_SHEET = "Financial Data"

TEMPLATE_ROWS: tuple[FinancialPeriodRecord, ...] = (
    FinancialPeriodRecord(
        date=date(2024, 1, 1), revenue=50000, operating_expenses=30000,
        customer_count=100, churn_rate=5, cash_in=55000, cash_out=35000,
        cash_balance=200000,
    ),
    FinancialPeriodRecord(
        date=date(2024, 2, 1), revenue=55000, operating_expenses=32000,
        customer_count=110, churn_rate=4.5, cash_in=60000, cash_out=37000,
        cash_balance=223000,
    ),
    FinancialPeriodRecord(
        date=date(2024, 3, 1), revenue=60000, operating_expenses=35000,
        customer_count=120, churn_rate=4, cash_in=65000, cash_out=40000,
        cash_balance=248000,
    ),
)


class TemplateBuilder:
    """Build an .xlsx workbook with the canonical headers and example rows."""

    def __init__(self, rows: Sequence[FinancialPeriodRecord] = TEMPLATE_ROWS):
        self.rows = rows

    def build(self) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = TEMPLATE_SHEET

        ws.append([c.header for c in COLUMNS])
        for cell in ws[1]:
            cell.font = Font(bold=True)

        for record in self.rows:
            # ISO date text, not a date cell
            ws.append([
                record.date.isoformat() if c.field == "date" else getattr(record, c.field)
                for c in COLUMNS
            ])

        for idx, column in enumerate(COLUMNS, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = max(12, len(column.header) + 4)

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
