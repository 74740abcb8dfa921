from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus, RequestType


@dataclass(frozen=True)
class Request:
    """Leave, permission or salary-advance request.

    ``target_date`` is the day a leave/permission applies to, or the day an
    advance is dated for payroll. ``duration_minutes`` only matters for
    PERMISSION and ``amount`` only for ADVANCE.
    """

    request_id: str
    employee_id: str
    request_type: RequestType
    status: RequestStatus
    target_date: date
    duration_minutes: Optional[float] = None
    amount: Optional[float] = None
    leave_type: Optional[str] = None
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None

    @property
    def is_approved(self) -> bool:
        return self.status == RequestStatus.APPROVED


@dataclass(frozen=True)
class NewRequest:
    employee_id: str
    request_type: RequestType
    target_date: date
    duration_minutes: Optional[float] = None
    amount: Optional[float] = None
    leave_type: Optional[str] = None
    reason: Optional[str] = None
