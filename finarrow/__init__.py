"""FinArrow: SaaS KPI dashboard from a monthly financial spreadsheet."""

__version__ = "1.0.0"
