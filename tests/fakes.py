from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from geo_attendance.attendance.model import AttendanceSession
from geo_attendance.attendance.service import AttendanceService
from geo_attendance.core.enums import RequestStatus, RequestType, SessionType, WorkMode
from geo_attendance.durations.service import DurationService
from geo_attendance.employees.model import Employee
from geo_attendance.geofence.model import Coordinates, Fence
from geo_attendance.geofence.service import GeofenceService
from geo_attendance.identity.model import FaceMatch
from geo_attendance.identity.service import IdentityService
from geo_attendance.reports.service import ReportService
from geo_attendance.requests.model import NewRequest, Request
from geo_attendance.requests.service import RequestService
from geo_attendance.settings.service import PolicyProvider
from geo_attendance.tracking.locks import EmployeeLocks
from geo_attendance.tracking.model import LocationPing, TrackingConfig, TrackingState
from geo_attendance.tracking.state_machine import PresenceStateMachine

OFFICE = Coordinates(12.9716, 77.5946)
# About 1.1 km north of OFFICE.
FAR_AWAY = Coordinates(12.9816, 77.5946)


def make_fence(fence_id: str = "BR1", center: Coordinates = OFFICE, radius: float = 100) -> Fence:
    return Fence(fence_id=fence_id, name=f"Branch {fence_id}", center=center, radius_meters=radius, branch_id=fence_id)


def make_employee(employee_id: str = "EMP001", **overrides) -> Employee:
    fields = dict(
        employee_id=employee_id,
        name=f"Employee {employee_id}",
        department="Sales",
        designation="Executive",
        branch_id="BR1",
        work_mode=WorkMode.OFFICE,
        fixed_salary=30000.0,
    )
    fields.update(overrides)
    return Employee(**fields)


class InMemoryEmployees:
    def __init__(self, *employees: Employee):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def list_all(self, *, branch_id: Optional[str] = None):
        items = [e for e in self._by_id.values() if e.is_active]
        if branch_id is not None:
            items = [e for e in items if e.branch_id == branch_id]
        return sorted(items, key=lambda e: e.employee_id)


class InMemoryFences:
    def __init__(self, *fences: Fence):
        self._by_id = {f.fence_id: f for f in fences}

    def list_active_fences(self):
        return [f for f in self._by_id.values() if f.is_active]

    def get_fence(self, fence_id: str) -> Optional[Fence]:
        return self._by_id.get(fence_id)


class InMemorySettings:
    def __init__(self, attendance: Optional[dict] = None, global_fence: Optional[Fence] = None, *, fail: bool = False):
        self.attendance = attendance
        self.global_fence = global_fence
        self.fail = fail

    def get_attendance_settings(self):
        if self.fail:
            raise ConnectionError("settings store unavailable")
        return self.attendance

    def get_global_fence(self):
        return self.global_fence


class InMemorySessions:
    def __init__(self):
        self._by_id: dict[str, AttendanceSession] = {}
        self._next = 1

    def add(self, session: AttendanceSession) -> AttendanceSession:
        self._by_id[session.session_id] = session
        return session

    def all(self) -> list[AttendanceSession]:
        return sorted(self._by_id.values(), key=lambda s: s.check_in_time)

    def create_session(self, *, employee_id, work_date, check_in_time, location, session_type, status=None):
        session = AttendanceSession(
            session_id=f"S{self._next}",
            employee_id=employee_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_in_location=location,
            session_type=session_type,
            status=status,
        )
        self._next += 1
        return self.add(session)

    def close_session(self, session_id, check_out_time, *, reason=None):
        session = self._by_id.get(session_id)
        if session is None:
            return None
        closed = replace(session, check_out_time=check_out_time, close_reason=reason)
        self._by_id[session_id] = closed
        return closed

    def get(self, session_id: str) -> Optional[AttendanceSession]:
        return self._by_id.get(session_id)

    def list_open_sessions(self, employee_id):
        return [s for s in self.all() if s.employee_id == employee_id and s.is_open]

    def get_open_session(self, employee_id):
        open_sessions = self.list_open_sessions(employee_id)
        return open_sessions[-1] if open_sessions else None

    def list_sessions_for_date(self, employee_id, work_date):
        return [s for s in self.all() if s.employee_id == employee_id and s.work_date == work_date]

    def list_sessions_for_date_range(self, start_date, end_date, *, employee_id=None):
        return [
            s
            for s in self.all()
            if start_date <= s.work_date <= end_date and (employee_id is None or s.employee_id == employee_id)
        ]

    def get_recent_for_employee(self, employee_id, limit):
        items = [s for s in self.all() if s.employee_id == employee_id]
        return list(reversed(items))[:limit]


class InMemoryTracking:
    def __init__(self):
        self.states: dict[str, TrackingState] = {}
        self.saves = 0

    def get(self, employee_id: str) -> TrackingState:
        return self.states.get(employee_id) or TrackingState(employee_id=employee_id)

    def save(self, state: TrackingState) -> None:
        self.states[state.employee_id] = state
        self.saves += 1


class InMemoryPings:
    def __init__(self):
        self.pings: list[LocationPing] = []

    def append_ping(self, ping: LocationPing) -> LocationPing:
        stored = replace(ping, ping_id=len(self.pings) + 1)
        self.pings.append(stored)
        return stored

    def list_pings_for_date(self, employee_id: str, work_date: date):
        return [p for p in self.pings if p.employee_id == employee_id and p.work_date == work_date]


class InMemoryRequests:
    def __init__(self):
        self._by_id: dict[str, Request] = {}
        self._next = 1

    def add(self, request: Request) -> Request:
        self._by_id[request.request_id] = request
        return request

    def approved(self, request_type: RequestType, employee_id: str, target_date: date, **fields) -> Request:
        request = Request(
            request_id=f"R{self._next}",
            employee_id=employee_id,
            request_type=request_type,
            status=RequestStatus.APPROVED,
            target_date=target_date,
            **fields,
        )
        self._next += 1
        return self.add(request)

    def create(self, new: NewRequest, *, created_at: datetime) -> Request:
        request = Request(
            request_id=f"R{self._next}",
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
        self._next += 1
        return self.add(request)

    def get(self, request_id: str) -> Optional[Request]:
        return self._by_id.get(request_id)

    def decide(self, request_id, *, status, decided_by, decided_at, rejection_reason=None) -> bool:
        request = self._by_id.get(request_id)
        if request is None or request.status != RequestStatus.PENDING:
            return False
        self._by_id[request_id] = replace(
            request,
            status=status,
            decided_by=decided_by,
            decided_at=decided_at,
            rejection_reason=rejection_reason,
        )
        return True

    def list_requests(self, *, employee_id=None, status=None, limit=200):
        items = [
            r
            for r in self._by_id.values()
            if (employee_id is None or r.employee_id == employee_id) and (status is None or r.status == status)
        ]
        items.sort(key=lambda r: r.created_at or datetime.min, reverse=True)
        return items[:limit]

    def list_approved(self, request_type, start_date, end_date, *, employee_id=None):
        return [
            r
            for r in self._by_id.values()
            if r.request_type == request_type
            and r.status == RequestStatus.APPROVED
            and start_date <= r.target_date <= end_date
            and (employee_id is None or r.employee_id == employee_id)
        ]


class FakeFaceMatcher:
    def __init__(self, employee_id: Optional[str] = None, similarity: float = 99.0):
        self.match = FaceMatch(employee_id, similarity) if employee_id else None
        self.images: list[bytes] = []

    def match_face(self, image: bytes) -> Optional[FaceMatch]:
        self.images.append(image)
        return self.match


@dataclass
class World:
    employees: InMemoryEmployees
    fences: InMemoryFences
    settings: InMemorySettings
    sessions: InMemorySessions
    tracking: InMemoryTracking
    pings: InMemoryPings
    requests: InMemoryRequests
    presence: PresenceStateMachine
    durations: DurationService
    attendance: AttendanceService
    request_service: RequestService
    reports: ReportService

    def open_session(self, employee_id: str, check_in_time: datetime, **fields) -> AttendanceSession:
        return self.sessions.create_session(
            employee_id=employee_id,
            work_date=check_in_time.date(),
            check_in_time=check_in_time,
            location=OFFICE,
            session_type=fields.pop("session_type", SessionType.OFFICE),
            **fields,
        )


def make_world(
    *employees: Employee,
    fences=None,
    settings: Optional[InMemorySettings] = None,
    face_matcher: Optional[FakeFaceMatcher] = None,
    tracking_config: Optional[TrackingConfig] = None,
) -> World:
    employees_repo = InMemoryEmployees(*(employees or (make_employee(),)))
    fences_repo = InMemoryFences(*(fences if fences is not None else (make_fence(),)))
    settings_repo = settings or InMemorySettings()
    sessions = InMemorySessions()
    tracking = InMemoryTracking()
    pings = InMemoryPings()
    requests = InMemoryRequests()

    locks = EmployeeLocks()
    geofence = GeofenceService(fences_repo, settings_repo)
    policies = PolicyProvider(settings_repo)
    presence = PresenceStateMachine(
        tracking, sessions, pings, geofence, config=tracking_config or TrackingConfig(), locks=locks
    )
    durations = DurationService(sessions, requests, pings)
    identity = IdentityService(face_matcher) if face_matcher else None
    attendance = AttendanceService(
        employees_repo,
        sessions,
        tracking,
        presence,
        geofence,
        policies,
        durations,
        identity=identity,
        locks=locks,
    )

    return World(
        employees=employees_repo,
        fences=fences_repo,
        settings=settings_repo,
        sessions=sessions,
        tracking=tracking,
        pings=pings,
        requests=requests,
        presence=presence,
        durations=durations,
        attendance=attendance,
        request_service=RequestService(requests, employees_repo),
        reports=ReportService(employees_repo, sessions, requests, policies, max_workers=2),
    )
