import csv
import io
from datetime import date, datetime

import pytest

from geo_attendance.core.enums import RequestType, StatusColor, StatusTag
from geo_attendance.core.exceptions import ValidationError
from geo_attendance.reports.export import BREAKDOWN_FIELDS, range_breakdown_csv_bytes, write_daily_csv

from fakes import make_employee, make_world

NOW = datetime(2026, 3, 4, 20, 0)


@pytest.fixture
def world():
    w = make_world(make_employee("EMP001"), make_employee("EMP002", branch_id="BR2"))
    # Split day on Wednesday 2026-03-04: lunch break between two sessions.
    first = w.open_session("EMP001", datetime(2026, 3, 4, 9, 0))
    w.sessions.close_session(first.session_id, datetime(2026, 3, 4, 12, 0))
    second = w.open_session("EMP001", datetime(2026, 3, 4, 13, 0))
    w.sessions.close_session(second.session_id, datetime(2026, 3, 4, 18, 0))
    # Late on Tuesday, covered by a permission.
    late = w.open_session("EMP001", datetime(2026, 3, 3, 9, 30))
    w.sessions.close_session(late.session_id, datetime(2026, 3, 3, 18, 0))
    w.requests.approved(RequestType.PERMISSION, "EMP001", date(2026, 3, 3), duration_minutes=30)
    w.requests.approved(RequestType.LEAVE, "EMP001", date(2026, 3, 2), leave_type="Sick Leave")
    return w


def test_daily_report_merges_sessions_into_one_envelope(world):
    report = {r.employee.employee_id: r for r in world.reports.daily_report(date(2026, 3, 4), now=NOW)}

    assert report["EMP001"].result.tags == (StatusTag.PRESENT,)
    assert report["EMP001"].result.times == {"in": "09:00", "out": "18:00"}
    assert report["EMP002"].result.tags == (StatusTag.ABSENT,)
    assert report["EMP002"].result.color == StatusColor.RED


def test_daily_report_branch_filter(world):
    report = world.reports.daily_report(date(2026, 3, 4), branch_id="BR1", now=NOW)

    assert [r.employee.employee_id for r in report] == ["EMP001"]
    assert report[0].to_dict()["employeeId"] == "EMP001"
    assert report[0].to_dict()["remarks"] == "On Time"


def test_range_report_counts_tags_per_employee(world):
    report = {
        r.employee.employee_id: r
        for r in world.reports.range_report(date(2026, 3, 1), date(2026, 3, 4), now=NOW)
    }

    first = report["EMP001"].stats
    assert first.to_dict() == {
        "present": 1,
        "absent": 0,
        "lateIn": 0,
        "earlyOut": 0,
        "halfDay": 0,
        "weekOff": 1,
        "leave": 1,
        "permission": 1,
        "totalDays": 4,
    }
    second = report["EMP002"].stats
    assert second.absent == 3
    assert second.week_off == 1

    breakdown = report["EMP001"].breakdown()
    assert [row["date"] for row in breakdown] == ["2026-03-01", "2026-03-02", "2026-03-03", "2026-03-04"]
    assert breakdown[1]["remarks"] == "Sick Leave"
    assert breakdown[2]["status"] == ["Permission in"]


def test_range_report_rejects_inverted_range(world):
    with pytest.raises(ValidationError):
        world.reports.range_report(date(2026, 3, 4), date(2026, 3, 1), now=NOW)


def test_range_breakdown_csv(world):
    reports = world.reports.range_report(date(2026, 3, 3), date(2026, 3, 4), now=NOW)

    data = range_breakdown_csv_bytes(reports)

    assert data.startswith(b"\xef\xbb\xbf")
    rows = list(csv.DictReader(io.StringIO(data.decode("utf-8-sig"))))
    assert len(rows) == 4
    assert list(rows[0].keys()) == BREAKDOWN_FIELDS
    assert rows[1]["employee_id"] == "EMP001"
    assert rows[1]["status"] == "Present"
    assert rows[1]["check_in"] == "09:00"
    assert rows[2]["check_out"] == "-"


def test_daily_csv_one_row_per_employee(world):
    out = io.StringIO()
    write_daily_csv(world.reports.daily_report(date(2026, 3, 4), now=NOW), out)

    lines = out.getvalue().strip().splitlines()
    assert lines[0] == ",".join(BREAKDOWN_FIELDS)
    assert len(lines) == 3
