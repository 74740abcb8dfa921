from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AutoCheckoutReason, SessionType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, row_coordinates
from ..geofence.model import Coordinates
from .model import AttendanceSession
from .repository import SessionRepository

_COLUMNS = """
    session_id, employee_id, work_date, check_in_time, check_out_time,
    check_in_lat, check_in_lng, session_type, status, close_reason
"""


def _to_session(r: dict) -> AttendanceSession:
    return AttendanceSession(
        session_id=str(r["session_id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        check_in_location=row_coordinates(r, "check_in_lat", "check_in_lng"),
        session_type=SessionType(r.get("session_type") or SessionType.OFFICE.value),
        status=r.get("status"),
        close_reason=AutoCheckoutReason(r["close_reason"]) if r.get("close_reason") else None,
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        session_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_sessions(
                    session_id, employee_id, work_date, check_in_time,
                    check_in_lat, check_in_lng, session_type, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    session_id,
                    employee_id,
                    work_date,
                    check_in_time,
                    location.latitude if location else None,
                    location.longitude if location else None,
                    session_type.value,
                    status,
                ),
            )
        return AttendanceSession(
            session_id=session_id,
            employee_id=employee_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_in_location=location,
            session_type=session_type,
            status=status,
        )

    def close_session(
        self,
        session_id: str,
        check_out_time: datetime,
        *,
        reason: Optional[AutoCheckoutReason] = None,
    ) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET check_out_time=%s, close_reason=%s
                WHERE session_id=%s
                """,
                (check_out_time, reason.value if reason else None, session_id),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_id=%s", (session_id,))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def get_open_session(self, employee_id: str) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE employee_id=%s AND check_out_time IS NULL
                ORDER BY check_in_time DESC
                LIMIT 1
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_open_sessions(self, employee_id: str) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE employee_id=%s AND check_out_time IS NULL
                ORDER BY check_in_time
                """,
                (employee_id,),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_sessions_for_date(self, employee_id: str, work_date: date) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE employee_id=%s AND work_date=%s
                ORDER BY check_in_time
                """,
                (employee_id, work_date),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_sessions_for_date_range(
        self,
        start_date: date,
        end_date: date,
        *,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceSession]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE {where}
                ORDER BY work_date, employee_id, check_in_time
                """,
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE employee_id=%s
                ORDER BY work_date DESC, check_in_time DESC
                LIMIT %s
                """,
                (employee_id, int(limit)),
            )
            return [_to_session(r) for r in fetchall(cur)]
