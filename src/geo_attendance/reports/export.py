from __future__ import annotations

import csv
import io
from typing import Iterable, TextIO

from .model import EmployeeDayReport, EmployeeRangeReport

BREAKDOWN_FIELDS = [
    "date",
    "employee_id",
    "name",
    "department",
    "status",
    "remarks",
    "check_in",
    "check_out",
]


def _row(employee, result) -> dict:
    return {
        "date": result.work_date.strftime("%Y-%m-%d"),
        "employee_id": employee.employee_id,
        "name": employee.name,
        "department": employee.department or "-",
        "status": ", ".join(result.status),
        "remarks": result.remarks,
        "check_in": result.times["in"],
        "check_out": result.times["out"],
    }


def write_daily_csv(reports: Iterable[EmployeeDayReport], out: TextIO) -> None:
    writer = csv.DictWriter(out, fieldnames=BREAKDOWN_FIELDS)
    writer.writeheader()
    for r in reports:
        writer.writerow(_row(r.employee, r.result))


def write_range_breakdown_csv(reports: Iterable[EmployeeRangeReport], out: TextIO) -> None:
    """One row per employee-day, grouped by employee."""

    writer = csv.DictWriter(out, fieldnames=BREAKDOWN_FIELDS)
    writer.writeheader()
    for r in reports:
        for result in r.daily:
            writer.writerow(_row(r.employee, result))


def range_breakdown_csv_bytes(reports: Iterable[EmployeeRangeReport]) -> bytes:
    # BOM so spreadsheet apps pick up UTF-8 names.
    out = io.StringIO()
    write_range_breakdown_csv(reports, out)
    return out.getvalue().encode("utf-8-sig")
