from datetime import date, datetime

import pytest

from geo_attendance.attendance.model import EffectiveAttendance
from geo_attendance.core.enums import RequestStatus, RequestType, StatusColor, StatusTag
from geo_attendance.requests.model import Request
from geo_attendance.settings.model import AttendancePolicy
from geo_attendance.status.engine import AttendanceStatusEngine, classify_check_in, derive_color

SUNDAY = date(2026, 3, 1)
WEDNESDAY = date(2026, 3, 4)
LATER = datetime(2026, 3, 10, 12, 0)
POLICY = AttendancePolicy(work_start_time="09:00", work_end_time="18:00")


def _at(hour, minute, day=WEDNESDAY):
    return datetime(day.year, day.month, day.day, hour, minute)


def _request(request_type, day=WEDNESDAY, **fields):
    return Request(
        request_id="R1",
        employee_id="EMP001",
        request_type=request_type,
        status=RequestStatus.APPROVED,
        target_date=day,
        **fields,
    )


@pytest.fixture
def engine():
    return AttendanceStatusEngine()


def compute(engine, *, day=WEDNESDAY, check_in=None, check_out=None, leave=None, permission=None, now=LATER):
    attendance = EffectiveAttendance(check_in, check_out) if check_in else None
    return engine.compute(
        work_date=day,
        attendance=attendance,
        leave=leave,
        permission=permission,
        policy=POLICY,
        now=now,
    )


def test_sunday_without_attendance_is_week_off(engine):
    result = compute(engine, day=SUNDAY)

    assert result.status == ["Week off"]
    assert result.color == StatusColor.GRAY
    assert result.remarks == "Sunday Holiday"
    assert result.to_dict() == {"status": ["Week off"], "remarks": "Sunday Holiday", "color": "gray"}


def test_sunday_with_attendance_continues_evaluation(engine):
    result = compute(engine, day=SUNDAY, check_in=_at(9, 0, SUNDAY), check_out=_at(18, 10, SUNDAY))

    assert result.status == ["Week off worked"]
    assert result.color == StatusColor.GREEN


def test_weekday_without_attendance_is_absent(engine):
    result = compute(engine)

    assert result.status == ["Absent"]
    assert result.color == StatusColor.RED
    assert result.remarks == "No Check-in"


def test_leave_without_attendance_is_terminal_orange(engine):
    result = compute(engine, leave=_request(RequestType.LEAVE, leave_type="Sick Leave"))

    assert result.status == ["Leave"]
    assert result.remarks == "Sick Leave"
    assert result.color == StatusColor.ORANGE


def test_leave_with_attendance_marks_present_on_leave_and_blue(engine):
    result = compute(
        engine,
        check_in=_at(9, 30),
        check_out=_at(18, 0),
        leave=_request(RequestType.LEAVE),
    )

    assert result.tags[:3] == (StatusTag.LEAVE, StatusTag.PRESENT_ON_LEAVE, StatusTag.LATE_IN)
    assert result.color == StatusColor.BLUE


def test_late_check_in_without_permission(engine):
    result = compute(engine, check_in=_at(9, 20), check_out=_at(18, 0))

    assert "Late in" in result.status
    assert "Permission in" not in result.status
    assert result.color == StatusColor.ORANGE


def test_late_check_in_with_permission(engine):
    result = compute(
        engine,
        check_in=_at(9, 20),
        check_out=_at(18, 0),
        permission=_request(RequestType.PERMISSION, duration_minutes=30),
    )

    assert "Permission in" in result.status
    assert "Late in" not in result.status
    assert result.remarks == "Late entry permitted"
    assert result.color == StatusColor.GREEN


def test_check_in_at_the_grace_cutoff_is_not_late(engine):
    result = compute(engine, check_in=_at(9, 15), check_out=_at(18, 0))

    assert result.status == ["Present"]
    assert result.remarks == "On Time"
    assert result.color == StatusColor.GREEN
    assert result.times == {"in": "09:15", "out": "18:00"}


def test_half_day_in_stacks_with_late_in(engine):
    result = compute(engine, check_in=_at(12, 30), check_out=_at(18, 0))

    assert result.status == ["Late in", "Half day in"]


def test_early_in_alone_still_counts_as_present(engine):
    result = compute(engine, check_in=_at(8, 15), check_out=_at(18, 0))

    assert result.status == ["Early in", "Present"]
    assert result.color == StatusColor.GREEN


def test_early_out_without_half_day_out_for_long_session(engine):
    result = compute(engine, check_in=_at(9, 5), check_out=_at(17, 0))

    assert "Early out" in result.status
    assert "Half day out" not in result.status
    assert result.color == StatusColor.ORANGE


def test_short_session_leaving_early_is_half_day_out(engine):
    result = compute(engine, check_in=_at(9, 0), check_out=_at(12, 0))

    assert result.status == ["Early out", "Half day out"]


def test_late_out_after_shift_end_window(engine):
    result = compute(engine, check_in=_at(9, 0), check_out=_at(18, 31))

    assert result.status == ["Late out"]
    assert result.color == StatusColor.GREEN


def test_missing_check_out_on_past_day(engine):
    result = compute(engine, check_in=_at(9, 0))

    assert result.status == ["Shift out punch not done"]
    assert result.color == StatusColor.RED
    assert result.times["out"] == "-"


def test_missing_check_out_today_is_working_until_an_hour_after_shift(engine):
    working = compute(engine, check_in=_at(9, 0), now=_at(19, 0))
    missed = compute(engine, check_in=_at(9, 0), now=_at(19, 1))

    assert working.status == ["Working"]
    assert missed.status == ["Shift out punch not done"]


def test_leave_color_overrides_red(engine):
    result = compute(engine, check_in=_at(9, 0), leave=_request(RequestType.LEAVE))

    assert StatusTag.MISSED_PUNCH_OUT in result.tags
    assert result.color == StatusColor.BLUE


def test_same_inputs_give_identical_results(engine):
    first = compute(engine, check_in=_at(9, 20), check_out=_at(17, 0))
    second = compute(engine, check_in=_at(9, 20), check_out=_at(17, 0))

    assert first == second


@pytest.mark.parametrize(
    "tags, expected",
    [
        ([], StatusColor.GREEN),
        ([StatusTag.PRESENT, StatusTag.LATE_OUT], StatusColor.GREEN),
        ([StatusTag.MISSED_PUNCH_OUT], StatusColor.RED),
        ([StatusTag.LATE_IN, StatusTag.MISSED_PUNCH_OUT], StatusColor.ORANGE),
        ([StatusTag.LEAVE, StatusTag.HALF_DAY_OUT], StatusColor.BLUE),
    ],
)
def test_derive_color_precedence(tags, expected):
    assert derive_color(tags) == expected


def test_classify_check_in_uses_policy_thresholds():
    assert classify_check_in(_at(9, 15), POLICY) == "present"
    assert classify_check_in(_at(9, 16), POLICY) == "late"
    assert classify_check_in(_at(12, 1), POLICY) == "half-day"
