from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional

from ..core.enums import AutoCheckoutReason, SessionType
from ..geofence.model import Coordinates


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one check-in/check-out cycle on a calendar day."""

    session_id: str
    employee_id: str
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    check_in_location: Optional[Coordinates] = None
    session_type: SessionType = SessionType.OFFICE
    status: Optional[str] = None
    close_reason: Optional[AutoCheckoutReason] = None

    @property
    def is_open(self) -> bool:
        return self.check_out_time is None

    def clamp_check_out(self, at: datetime) -> datetime:
        """Check-out never precedes check-in, whatever the client clock says."""
        return max(at, self.check_in_time)


@dataclass(frozen=True)
class EffectiveAttendance:
    """Min(in)/max(out) envelope of a day's sessions, used for status only."""

    check_in_time: datetime
    check_out_time: Optional[datetime] = None


def merge_sessions(sessions: Iterable[AttendanceSession]) -> Optional[EffectiveAttendance]:
    """First check-in and the check-out of the last session (None if that one is open)."""

    ordered = sorted(sessions, key=lambda s: s.check_in_time)
    if not ordered:
        return None
    return EffectiveAttendance(
        check_in_time=ordered[0].check_in_time,
        check_out_time=ordered[-1].check_out_time,
    )


@dataclass(frozen=True)
class CheckInResult:
    session: AttendanceSession
    employee_name: str
    ghost_tracking_healed: bool = False
    stale_session_closed: Optional[str] = None
    fence_distance_meters: Optional[float] = None

    @property
    def message(self) -> str:
        return f"Good morning, {self.employee_name}! Check-in successful."


@dataclass(frozen=True)
class CheckOutResult:
    session: AttendanceSession
    employee_name: str

    @property
    def message(self) -> str:
        return f"Goodbye, {self.employee_name}! Check-out successful."


@dataclass(frozen=True)
class AttendanceStatusView:
    """What the mobile client needs to decide which buttons to show."""

    employee_id: str
    is_tracking: bool
    auto_checked_out: bool
    can_resume: bool
    has_checked_in_today: bool
    has_checked_out_today: bool
    has_open_session: bool
    open_session: Optional[AttendanceSession]
    today_sessions: tuple[AttendanceSession, ...]
    attendance_duration_minutes: int
    permission_duration_minutes: int
    total_work_duration_minutes: int

    @property
    def can_check_in(self) -> bool:
        return not self.is_tracking and not self.can_resume and not self.has_open_session

    @property
    def can_check_out(self) -> bool:
        return self.is_tracking or self.can_resume or self.has_open_session
