"""Spreadsheet byte builders shared by unit and API tests."""

import csv
import io

from openpyxl import Workbook

from finarrow.domain.columns import TEMPLATE_HEADERS

JAN_ROW = ("2024-01-01", 50000, 30000, 100, 5, 55000, 35000, 200000)
FEB_ROW = ("2024-02-01", 55000, 32000, 110, 4.5, 60000, 37000, 223000)


def make_xlsx(rows, header=TEMPLATE_HEADERS) -> bytes:
    """Workbook bytes with *header* then *rows* on the first sheet."""
    wb = Workbook()
    ws = wb.active
    ws.append(list(header))
    for row in rows:
        ws.append(list(row))
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_csv(rows, header=TEMPLATE_HEADERS) -> bytes:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(list(header))
    for row in rows:
        writer.writerow(list(row))
    return buf.getvalue().encode("utf-8")
