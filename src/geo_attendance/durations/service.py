from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..attendance.repository import SessionRepository
from ..common.datetime_utils import now_local
from ..core.enums import RequestType
from ..requests.repository import RequestRepository
from ..tracking.model import WorkSummary
from ..tracking.repository import PingLogRepository
from .aggregator import DurationAggregator, DurationSummary


class DurationService:
    def __init__(
        self,
        sessions: SessionRepository,
        requests: RequestRepository,
        pings: PingLogRepository,
        *,
        aggregator: Optional[DurationAggregator] = None,
    ):
        self._sessions = sessions
        self._requests = requests
        self._pings = pings
        self._aggregator = aggregator or DurationAggregator()

    def compute_durations(
        self,
        employee_id: str,
        work_date: date,
        *,
        now: Optional[datetime] = None,
    ) -> DurationSummary:
        sessions = self._sessions.list_sessions_for_date(employee_id, work_date)
        permissions = self._requests.list_approved(
            RequestType.PERMISSION, work_date, work_date, employee_id=employee_id
        )
        return self._aggregator.summarize(sessions, permissions, now or now_local())

    def ping_work_summary(self, employee_id: str, work_date: date) -> WorkSummary:
        pings = self._pings.list_pings_for_date(employee_id, work_date)
        return self._aggregator.summarize_pings(employee_id, work_date, pings)
