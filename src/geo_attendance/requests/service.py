from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import RequestStatus, RequestType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..logging_config import get_logger
from .model import NewRequest, Request
from .repository import RequestRepository

logger = get_logger(__name__)


class RequestService:
    """Leave / permission / advance workflow: PENDING, then decided exactly once."""

    def __init__(self, requests: RequestRepository, employees: EmployeeRepository):
        self._requests = requests
        self._employees = employees

    @staticmethod
    def _parse_type(value) -> RequestType:
        try:
            return RequestType(str(value).strip().upper())
        except ValueError:
            allowed = ", ".join(t.value for t in RequestType)
            raise ValidationError(f"Invalid request type. Allowed: {allowed}")

    @staticmethod
    def _positive(value, field_name: str) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{field_name} must be a number")
        if number <= 0:
            raise ValidationError(f"{field_name} must be greater than zero")
        return number

    def create_request(
        self,
        *,
        employee_id: str,
        request_type,
        target_date: Optional[date],
        duration_minutes=None,
        amount=None,
        leave_type: Optional[str] = None,
        reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Request:
        rtype = self._parse_type(request_type)
        if not self._employees.get_by_id(employee_id):
            raise NotFoundError("Employee not found")
        if target_date is None:
            raise ValidationError("Request date is required")

        if rtype == RequestType.PERMISSION:
            duration_minutes = self._positive(duration_minutes, "Permission duration")
        elif rtype == RequestType.ADVANCE:
            amount = self._positive(amount, "Advance amount")

        new = NewRequest(
            employee_id=employee_id,
            request_type=rtype,
            target_date=target_date,
            duration_minutes=duration_minutes if rtype == RequestType.PERMISSION else None,
            amount=amount if rtype == RequestType.ADVANCE else None,
            leave_type=((leave_type or "").strip() or None) if rtype == RequestType.LEAVE else None,
            reason=(reason or "").strip() or None,
        )
        created = self._requests.create(new, created_at=now or now_local())
        logger.info("Created %s request %s for %s", rtype.value, created.request_id, employee_id)
        return created

    def approve(self, request_id: str, *, decided_by: str, now: Optional[datetime] = None) -> Request:
        return self._decide(request_id, RequestStatus.APPROVED, decided_by=decided_by, now=now)

    def reject(
        self,
        request_id: str,
        *,
        decided_by: str,
        reason: str = "",
        now: Optional[datetime] = None,
    ) -> Request:
        return self._decide(
            request_id,
            RequestStatus.REJECTED,
            decided_by=decided_by,
            rejection_reason=(reason or "").strip() or None,
            now=now,
        )

    def _decide(
        self,
        request_id: str,
        status: RequestStatus,
        *,
        decided_by: str,
        rejection_reason: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Request:
        req = self._requests.get(request_id)
        if not req:
            raise NotFoundError("Request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Request has already been processed")

        decided = self._requests.decide(
            request_id,
            status=status,
            decided_by=decided_by,
            decided_at=now or now_local(),
            rejection_reason=rejection_reason,
        )
        if not decided:
            raise ValidationError("Request has already been processed")

        logger.info("Request %s %s by %s", request_id, status.value.lower(), decided_by)
        return self._requests.get(request_id)

    def list_for_employee(self, employee_id: str) -> Sequence[Request]:
        return self._requests.list_requests(employee_id=employee_id)

    def list_all(self, *, status: Optional[RequestStatus] = None) -> Sequence[Request]:
        return self._requests.list_requests(status=status)

    def approved_on(
        self,
        request_type: RequestType,
        day: date,
        *,
        employee_id: Optional[str] = None,
    ) -> Sequence[Request]:
        return self._requests.list_approved(request_type, day, day, employee_id=employee_id)

    def approved_between(
        self,
        request_type: RequestType,
        start_date: date,
        end_date: date,
        *,
        employee_id: Optional[str] = None,
    ) -> Sequence[Request]:
        if end_date < start_date:
            raise ValidationError("End date must not be before start date")
        return self._requests.list_approved(request_type, start_date, end_date, employee_id=employee_id)

    def leave_for(self, employee_id: str, day: date) -> Optional[Request]:
        found = self.approved_on(RequestType.LEAVE, day, employee_id=employee_id)
        return found[0] if found else None

    def permission_for(self, employee_id: str, day: date) -> Optional[Request]:
        found = self.approved_on(RequestType.PERMISSION, day, employee_id=employee_id)
        return found[0] if found else None
