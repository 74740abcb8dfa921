from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import RequestStatus, RequestType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewRequest, Request
from .repository import RequestRepository

_COLUMNS = """
    request_id, employee_id, request_type, status, target_date,
    duration_minutes, amount, leave_type, reason, created_at,
    decided_by, decided_at, rejection_reason
"""


def _float_or_none(value) -> Optional[float]:
    return float(value) if value is not None else None


def _to_request(r: dict) -> Request:
    return Request(
        request_id=str(r["request_id"]),
        employee_id=str(r["employee_id"]),
        request_type=RequestType(r["request_type"]),
        status=RequestStatus(r["status"]),
        target_date=r["target_date"],
        duration_minutes=_float_or_none(r.get("duration_minutes")),
        amount=_float_or_none(r.get("amount")),
        leave_type=r.get("leave_type"),
        reason=r.get("reason"),
        created_at=r.get("created_at"),
        decided_by=r.get("decided_by"),
        decided_at=r.get("decided_at"),
        rejection_reason=r.get("rejection_reason"),
    )


class MySQLRequestRepository(RequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, new: NewRequest, *, created_at: datetime) -> Request:
        request_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO requests(
                    request_id, employee_id, request_type, status, target_date,
                    duration_minutes, amount, leave_type, reason, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request_id,
                    new.employee_id,
                    new.request_type.value,
                    RequestStatus.PENDING.value,
                    new.target_date,
                    new.duration_minutes,
                    new.amount,
                    new.leave_type,
                    new.reason,
                    created_at,
                ),
            )
        return Request(
            request_id=request_id,
            employee_id=new.employee_id,
            request_type=new.request_type,
            status=RequestStatus.PENDING,
            target_date=new.target_date,
            duration_minutes=new.duration_minutes,
            amount=new.amount,
            leave_type=new.leave_type,
            reason=new.reason,
            created_at=created_at,
        )

    def get(self, request_id: str) -> Optional[Request]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM requests WHERE request_id=%s", (request_id,))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def decide(
        self,
        request_id: str,
        *,
        status: RequestStatus,
        decided_by: str,
        decided_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE requests
                SET status=%s, decided_by=%s, decided_at=%s, rejection_reason=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    decided_by,
                    decided_at,
                    rejection_reason,
                    request_id,
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount == 1

    def list_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[Request]:
        clauses = ["1=1"]
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM requests
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_approved(
        self,
        request_type: RequestType,
        start_date: date,
        end_date: date,
        *,
        employee_id: Optional[str] = None,
    ) -> Sequence[Request]:
        clauses = ["request_type=%s", "status=%s", "target_date BETWEEN %s AND %s"]
        params: list[object] = [request_type.value, RequestStatus.APPROVED.value, start_date, end_date]
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM requests
                WHERE {" AND ".join(clauses)}
                ORDER BY target_date, created_at
                """,
                tuple(params),
            )
            return [_to_request(r) for r in fetchall(cur)]
