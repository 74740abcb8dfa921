from __future__ import annotations

from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceSession, merge_sessions
from ..attendance.repository import SessionRepository
from ..common.datetime_utils import iter_dates, now_local
from ..core.enums import RequestType
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..logging_config import get_logger
from ..requests.model import Request
from ..requests.repository import RequestRepository
from ..settings.model import AttendancePolicy
from ..settings.service import PolicyProvider
from ..status.engine import AttendanceStatusEngine
from ..status.model import DailyStatusResult
from .model import EmployeeDayReport, EmployeeRangeReport, RangeStats

logger = get_logger(__name__)

_Key = tuple[str, date]


class _DayInputs:
    """Range data fetched once, indexed by (employee_id, date)."""

    def __init__(
        self,
        sessions: Sequence[AttendanceSession],
        leaves: Sequence[Request],
        permissions: Sequence[Request],
    ):
        self.sessions: dict[_Key, list[AttendanceSession]] = defaultdict(list)
        for s in sessions:
            self.sessions[(s.employee_id, s.work_date)].append(s)
        self.leaves = self._first_by_key(leaves)
        self.permissions = self._first_by_key(permissions)

    @staticmethod
    def _first_by_key(requests: Sequence[Request]) -> dict[_Key, Request]:
        out: dict[_Key, Request] = {}
        for r in requests:
            out.setdefault((r.employee_id, r.target_date), r)
        return out


class ReportService:
    """Daily and range attendance reports across employees.

    Status computation is pure, so each employee is evaluated on a worker
    thread once the range data has been loaded.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        sessions: SessionRepository,
        requests: RequestRepository,
        policies: PolicyProvider,
        *,
        engine: Optional[AttendanceStatusEngine] = None,
        max_workers: int = 4,
    ):
        self._employees = employees
        self._sessions = sessions
        self._requests = requests
        self._policies = policies
        self._engine = engine or AttendanceStatusEngine()
        self._max_workers = max(1, int(max_workers))

    def _load(self, start: date, end: date) -> _DayInputs:
        return _DayInputs(
            self._sessions.list_sessions_for_date_range(start, end),
            self._requests.list_approved(RequestType.LEAVE, start, end),
            self._requests.list_approved(RequestType.PERMISSION, start, end),
        )

    def _status_for(
        self,
        employee: Employee,
        day: date,
        inputs: _DayInputs,
        policy: AttendancePolicy,
        now: datetime,
    ) -> DailyStatusResult:
        key = (employee.employee_id, day)
        return self._engine.compute(
            work_date=day,
            attendance=merge_sessions(inputs.sessions.get(key, ())),
            leave=inputs.leaves.get(key),
            permission=inputs.permissions.get(key),
            policy=policy,
            now=now,
        )

    def daily_report(
        self,
        day: date,
        *,
        branch_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[EmployeeDayReport]:
        now = now or now_local()
        employees = list(self._employees.list_all(branch_id=branch_id))
        inputs = self._load(day, day)
        policy = self._policies.resolve()

        def build(employee: Employee) -> EmployeeDayReport:
            return EmployeeDayReport(employee, self._status_for(employee, day, inputs, policy, now))

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            report = list(pool.map(build, employees))

        logger.info("Daily report for %s: %d employee(s)", day, len(report))
        return report

    def range_report(
        self,
        start: date,
        end: date,
        *,
        branch_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> list[EmployeeRangeReport]:
        if end < start:
            raise ValidationError("End date must not be before start date")

        now = now or now_local()
        days = list(iter_dates(start, end))
        employees = list(self._employees.list_all(branch_id=branch_id))
        inputs = self._load(start, end)
        policy = self._policies.resolve()

        def build(employee: Employee) -> EmployeeRangeReport:
            stats = RangeStats(total_days=len(days))
            daily = []
            for day in days:
                result = self._status_for(employee, day, inputs, policy, now)
                stats.record(result)
                daily.append(result)
            return EmployeeRangeReport(employee=employee, stats=stats, daily=tuple(daily))

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            report = list(pool.map(build, employees))

        logger.info("Range report %s..%s: %d employee(s), %d day(s)", start, end, len(report), len(days))
        return report
