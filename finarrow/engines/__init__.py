"""Core business-logic engines."""

from finarrow.engines.kpi_engine import KPIEngine
from finarrow.engines.spreadsheet_parser import SpreadsheetParser
from finarrow.engines.template_builder import TemplateBuilder

__all__ = [
    "KPIEngine",
    "SpreadsheetParser",
    "TemplateBuilder",
]
