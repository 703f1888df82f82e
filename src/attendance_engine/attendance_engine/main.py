"""Batch chấm công + tính lương cho một tháng.

    python -m src.attendance_engine.attendance_engine.main 2024 5 E001 E002 --xlsx payroll.xlsx --csv payroll.csv
"""
from __future__ import annotations

import argparse
import importlib
import logging
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from config import get_settings_module

from .common.datetime_utils import month_bounds
from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .payroll.service import PayrollRun
from .reports.export import PAYROLL_FIELDS, build_payroll_rows, write_csv, write_xlsx

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Derive day records and run payroll for one month.")
    parser.add_argument("year", type=int)
    parser.add_argument("month", type=int)
    parser.add_argument("employee_ids", nargs="+")
    parser.add_argument("--xlsx", type=Path, default=None, help="write the payroll workbook here")
    parser.add_argument("--csv", type=Path, default=None, help="write the payroll table as CSV here")
    parser.add_argument("--fill-absent", action="store_true", help="create absent records for weekdays without punches")
    return parser.parse_args(argv)


def write_reports(payroll: PayrollRun, *, xlsx: Optional[Path] = None, csv: Optional[Path] = None) -> list[Path]:
    written: list[Path] = []
    if xlsx is not None:
        xlsx.write_bytes(write_xlsx(payroll))
        written.append(xlsx)
    if csv is not None:
        csv.write_bytes(write_csv(build_payroll_rows(payroll), PAYROLL_FIELDS))
        written.append(csv)
    for path in written:
        logger.info("wrote %s", path)
    return written


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)

    load_dotenv(override=False)
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db_config = getattr(settings, "DB_CONFIG")
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(settings)
    start, end = month_bounds(args.year, args.month)

    derived = container.attendance_service.derive_range(
        start_date=start,
        end_date=end,
        employee_ids=args.employee_ids,
        fill_absent=args.fill_absent,
    )
    for err in derived.errors:
        logger.warning("Skipped %s: %s", err.key, err.reason)

    payroll = container.payroll_service.run_period(year=args.year, month=args.month, employee_ids=args.employee_ids)
    for err in payroll.errors:
        logger.warning("Payroll error %s: %s", err.key, err.reason)

    totals = payroll.totals
    logger.info(
        "%s: employees=%d payable=%.2f needs_review=%d",
        payroll.period,
        totals.total_employees,
        totals.total_payable,
        totals.employees_needing_review,
    )

    write_reports(payroll, xlsx=args.xlsx, csv=args.csv)

    return 1 if payroll.errors else 0


if __name__ == "__main__":
    raise SystemExit(run())
