from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable

from ..attendance.model import AttendanceSession
from ..common.datetime_utils import format_duration, minutes_between
from ..requests.model import Request
from ..tracking.model import LocationPing, WorkSummary


@dataclass(frozen=True)
class DurationSummary:
    """Unrounded minute totals; round only when presenting."""

    attendance_minutes: float
    permission_minutes: float
    total_minutes: float

    def to_dict(self) -> dict:
        return {
            "attendanceDurationMinutes": round(self.attendance_minutes),
            "permissionDurationMinutes": round(self.permission_minutes),
            "totalWorkDurationMinutes": round(self.total_minutes),
        }


class DurationAggregator:
    """Sum worked time across a day's discontinuous sessions."""

    @staticmethod
    def session_minutes(session: AttendanceSession, now: datetime) -> float:
        end = session.check_out_time or now
        return minutes_between(session.check_in_time, end)

    def summarize(
        self,
        sessions: Iterable[AttendanceSession],
        permissions: Iterable[Request],
        now: datetime,
    ) -> DurationSummary:
        attendance = sum(self.session_minutes(s, now) for s in sessions)
        permission = sum(float(p.duration_minutes or 0) for p in permissions)
        return DurationSummary(
            attendance_minutes=attendance,
            permission_minutes=permission,
            total_minutes=attendance + permission,
        )

    @staticmethod
    def summarize_pings(employee_id: str, work_date: date, pings: Iterable[LocationPing]) -> WorkSummary:
        # One ping a minute: each inside ping stands for one minute on site.
        total = inside = 0
        for ping in pings:
            total += 1
            if ping.is_inside_geofence:
                inside += 1
        return WorkSummary(
            employee_id=employee_id,
            work_date=work_date,
            total_pings=total,
            pings_inside=inside,
            pings_outside=total - inside,
            formatted_duration=format_duration(inside),
        )
