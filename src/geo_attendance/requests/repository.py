from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus, RequestType
from .model import NewRequest, Request


class RequestRepository(Protocol):
    def create(self, new: NewRequest, *, created_at: datetime) -> Request:
        raise NotImplementedError

    def get(self, request_id: str) -> Optional[Request]:
        raise NotImplementedError

    def decide(
        self,
        request_id: str,
        *,
        status: RequestStatus,
        decided_by: str,
        decided_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Move a PENDING request to ``status``. False when it was not pending."""

        raise NotImplementedError

    def list_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[Request]:
        """Newest first."""

        raise NotImplementedError

    def list_approved(
        self,
        request_type: RequestType,
        start_date: date,
        end_date: date,
        *,
        employee_id: Optional[str] = None,
    ) -> Sequence[Request]:
        raise NotImplementedError
