from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AutoCheckoutReason, SessionType
from ..geofence.model import Coordinates
from .model import AttendanceSession


class SessionRepository(Protocol):
    def create_session(
        self,
        *,
        employee_id: str,
        work_date: date,
        check_in_time: datetime,
        location: Optional[Coordinates],
        session_type: SessionType,
        status: Optional[str] = None,
    ) -> AttendanceSession:
        raise NotImplementedError

    def close_session(
        self,
        session_id: str,
        check_out_time: datetime,
        *,
        reason: Optional[AutoCheckoutReason] = None,
    ) -> Optional[AttendanceSession]:
        """Set the check-out time. Returns None when the session does not exist."""

        raise NotImplementedError

    def get_open_session(self, employee_id: str) -> Optional[AttendanceSession]:
        """Latest session without a check-out, whatever its date."""

        raise NotImplementedError

    def list_open_sessions(self, employee_id: str) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def list_sessions_for_date(self, employee_id: str, work_date: date) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def list_sessions_for_date_range(
        self,
        start_date: date,
        end_date: date,
        *,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceSession]:
        raise NotImplementedError
