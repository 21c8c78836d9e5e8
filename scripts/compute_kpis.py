#!/usr/bin/env python3
"""Compute SaaS KPIs from a monthly financial spreadsheet.

Usage locally:
    python -m scripts.compute_kpis data/metrics.xlsx          # human-readable summary
    python -m scripts.compute_kpis data/metrics.csv --json    # DashboardView as JSON

Runs the same parse → validate → compute path as the upload endpoint, without
a session. Exits with status 1 and the user-facing message if the file is
rejected.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

# Ensure the project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from finarrow.config import Settings
from finarrow.domain.errors import SpreadsheetError
from finarrow.facade import DashboardFacade
from finarrow.logging_config import setup_logging
from finarrow.services.report_service import report_rows
from finarrow.utils.financial_math import signed_percent

logger = logging.getLogger("compute_kpis")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute SaaS KPIs from a spreadsheet.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("file", type=Path, help="Path to an .xlsx or .csv file")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full dashboard view as JSON instead of a summary",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = Settings()
    # stdout carries the JSON document in --json mode
    setup_logging(
        json_logs=settings.json_logs,
        log_level="WARNING" if args.json else settings.log_level,
    )

    if not args.file.is_file():
        logger.error("File not found: %s", args.file)
        return 1

    t0 = time.time()
    facade = DashboardFacade(settings=settings)
    try:
        view = facade.analyze_file(args.file)
    except SpreadsheetError as exc:
        logger.error("Rejected %s: %s", args.file.name, exc.message)
        return 1

    if args.json:
        print(view.model_dump_json(by_alias=True, indent=2))
        return 0

    logger.info("=" * 60)
    logger.info("FINARROW: KPI summary for %s", args.file.name)
    logger.info("  Months: %d", view.record_count)
    logger.info("=" * 60)
    for label, value, change, _ in report_rows(view.kpis, settings.runway_sentinel_months):
        suffix = f" ({signed_percent(change)} MoM)" if change is not None else ""
        logger.info("  %-28s %s%s", label, value, suffix)
    if view.cash_zero_date:
        logger.info("  %-28s %s", "Cash zero date", view.cash_zero_date.isoformat())
    logger.info("=" * 60)
    logger.info("Done in %.2fs", time.time() - t0)
    return 0


if __name__ == "__main__":
    sys.exit(main())
