from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence, Union

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, TRAVEL_WORK_MODES
from ..core.enums import SessionType
from ..core.exceptions import (
    AuthorizationError,
    DuplicateCheckInError,
    GeofenceViolationError,
    NoOpenSessionError,
    NotFoundError,
    StaleSessionError,
    ValidationError,
)
from ..durations.service import DurationService
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..geofence.calculator import is_inside
from ..geofence.model import Coordinates
from ..geofence.service import GeofenceService
from ..identity.service import IdentityService
from ..logging_config import employee_context, get_logger
from ..settings.service import PolicyProvider
from ..status.engine import classify_check_in
from ..tracking.locks import EmployeeLocks
from ..tracking.model import TrackingState
from ..tracking.repository import TrackingStateRepository
from ..tracking.state_machine import PresenceStateMachine
from .model import AttendanceSession, AttendanceStatusView, CheckInResult, CheckOutResult
from .repository import SessionRepository

logger = get_logger(__name__)


class AttendanceService:
    """Check-in / check-out lifecycle and the live status read.

    Every mutation for one employee runs under that employee's lock, shared
    with the ping handler, so at most one session is ever open.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        sessions: SessionRepository,
        tracking: TrackingStateRepository,
        presence: PresenceStateMachine,
        geofence: GeofenceService,
        policies: PolicyProvider,
        durations: DurationService,
        *,
        identity: Optional[IdentityService] = None,
        locks: Optional[EmployeeLocks] = None,
    ):
        self._employees = employees
        self._sessions = sessions
        self._tracking = tracking
        self._presence = presence
        self._geofence = geofence
        self._policies = policies
        self._durations = durations
        self._identity = identity
        self._locks = locks or EmployeeLocks()

    def _require_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee record not found for ID: {employee_id}")
        return employee

    def _require_identity(self) -> IdentityService:
        if self._identity is None:
            raise ValidationError("Face verification is not configured")
        return self._identity

    # --- check-in ---------------------------------------------------------

    def _authorize_location(
        self,
        employee: Employee,
        location: Coordinates,
        session_type: SessionType,
        selected_branch_id: Optional[str],
    ) -> Optional[float]:
        if session_type == SessionType.TRAVEL:
            if employee.work_mode.value not in TRAVEL_WORK_MODES:
                raise AuthorizationError('Restricted: You are not authorized for "On Duty" check-in.')
            return None

        if selected_branch_id and employee.branch_id and employee.branch_id != selected_branch_id:
            raise AuthorizationError("You belong to a different branch. Please select the correct branch.")

        fence = self._geofence.resolve_check_in_fence(employee, selected_branch_id=selected_branch_id)
        if fence is None:
            logger.info("Geo-fence not configured, allowing check-in")
            return None

        check = is_inside(location, fence.center, fence.radius_meters)
        if not check.is_within:
            raise GeofenceViolationError(
                f"You are too far from the office! Distance: {round(check.distance_meters)}m "
                f"(Allowed: {round(fence.radius_meters)}m)",
                distance_meters=check.distance_meters,
                allowed_radius=fence.radius_meters,
            )
        return check.distance_meters

    @staticmethod
    def _check_open_session(session: AttendanceSession, now: datetime) -> None:
        if session.work_date == now.date():
            raise DuplicateCheckInError(
                f"Already checked in today at {session.check_in_time:%H:%M}. Please check out first.",
                check_in_time=session.check_in_time,
            )
        raise StaleSessionError(
            f"Open session from {session.work_date:%Y-%m-%d}",
            session_id=session.session_id,
        )

    def check_in(
        self,
        employee_id: str,
        *,
        location: Coordinates,
        session_type: Union[SessionType, str] = SessionType.OFFICE,
        selected_branch_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CheckInResult:
        now = now or now_local()
        try:
            session_type = SessionType(session_type)
        except ValueError:
            raise ValidationError(f"Unknown check-in type: {session_type}")

        with self._locks.hold(employee_id), employee_context(employee_id):
            employee = self._require_employee(employee_id)
            distance = self._authorize_location(employee, location, session_type, selected_branch_id)

            state = self._tracking.get(employee_id)
            open_sessions = list(self._sessions.list_open_sessions(employee_id))

            stale_closed = None
            for session in open_sessions:
                try:
                    self._check_open_session(session, now)
                except StaleSessionError as exc:
                    logger.info("Stale session detected from %s, auto-closing %s", session.work_date, exc.session_id)
                    self._sessions.close_session(exc.session_id, session.clamp_check_out(now))
                    stale_closed = exc.session_id

            ghost = state.is_tracking and not open_sessions
            if ghost:
                logger.info("Ghost tracking detected for %s, auto-correcting status", employee.name)

            session = self._sessions.create_session(
                employee_id=employee_id,
                work_date=now.date(),
                check_in_time=now,
                location=location,
                session_type=session_type,
                status=classify_check_in(now, self._policies.resolve()),
            )
            self._tracking.save(state.started(location=location, at=now))
            logger.info("Checked in (%s) session %s", session_type.value, session.session_id)

        return CheckInResult(
            session=session,
            employee_name=employee.name,
            ghost_tracking_healed=ghost,
            stale_session_closed=stale_closed,
            fence_distance_meters=distance,
        )

    def check_in_with_face(
        self,
        image: Union[bytes, str],
        *,
        location: Coordinates,
        expected_employee_id: Optional[str] = None,
        session_type: Union[SessionType, str] = SessionType.OFFICE,
        selected_branch_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CheckInResult:
        employee_id = self._require_identity().identify(image, expected_employee_id=expected_employee_id)
        return self.check_in(
            employee_id,
            location=location,
            session_type=session_type,
            selected_branch_id=selected_branch_id,
            now=now,
        )

    # --- check-out --------------------------------------------------------

    def check_out(self, employee_id: str, *, now: Optional[datetime] = None) -> CheckOutResult:
        now = now or now_local()

        with self._locks.hold(employee_id), employee_context(employee_id):
            employee = self._require_employee(employee_id)
            open_session = self._sessions.get_open_session(employee_id)
            if open_session is None:
                logger.info("Check-out rejected, no open session")
                raise NoOpenSessionError(f"No active check-in session found for employee: {employee_id}")

            closed = self._sessions.close_session(open_session.session_id, open_session.clamp_check_out(now))
            state = self._tracking.get(employee_id)
            self._tracking.save(state.stopped(at=now))
            logger.info("Checked out session %s", open_session.session_id)

        return CheckOutResult(session=closed or open_session, employee_name=employee.name)

    def check_out_with_face(
        self,
        image: Union[bytes, str],
        *,
        expected_employee_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CheckOutResult:
        employee_id = self._require_identity().identify(image, expected_employee_id=expected_employee_id)
        return self.check_out(employee_id, now=now)

    # --- status read ------------------------------------------------------

    def get_status(self, employee_id: str, *, now: Optional[datetime] = None) -> AttendanceStatusView:
        now = now or now_local()
        today = now.date()
        self._require_employee(employee_id)

        with employee_context(employee_id):
            state, auto_checked_out = self._presence.refresh_staleness(employee_id, now)

            today_sessions = sorted(
                self._sessions.list_sessions_for_date(employee_id, today),
                key=lambda s: s.check_in_time,
            )
            latest_today = today_sessions[-1] if today_sessions else None
            open_session = self._sessions.get_open_session(employee_id)
            today_open = latest_today if latest_today and latest_today.is_open else None

            durations = self._durations.compute_durations(employee_id, today, now=now)

        return AttendanceStatusView(
            employee_id=employee_id,
            is_tracking=state.is_tracking,
            auto_checked_out=auto_checked_out,
            can_resume=self._presence.can_resume(state, today_open, now),
            has_checked_in_today=latest_today is not None,
            has_checked_out_today=bool(latest_today and not latest_today.is_open),
            has_open_session=open_session is not None,
            open_session=open_session,
            today_sessions=tuple(today_sessions),
            attendance_duration_minutes=round(durations.attendance_minutes),
            permission_duration_minutes=round(durations.permission_minutes),
            total_work_duration_minutes=round(durations.total_minutes),
        )

    # --- maintenance ------------------------------------------------------

    def resume_session(self, employee_id: str, *, now: Optional[datetime] = None) -> TrackingState:
        now = now or now_local()

        with self._locks.hold(employee_id), employee_context(employee_id):
            self._require_employee(employee_id)
            state, _ = self._presence.refresh_staleness(employee_id, now)
            if state.is_tracking:
                return state

            today_open = next(
                (s for s in self._sessions.list_sessions_for_date(employee_id, now.date()) if s.is_open),
                None,
            )
            if not self._presence.can_resume(state, today_open, now):
                raise ValidationError("Session can no longer be resumed. Please check in again.")

            resumed = state.resumed(at=now)
            self._tracking.save(resumed)
            logger.info("Session resumed")
            return resumed

    def reset_tracking(self, employee_id: str, *, now: Optional[datetime] = None) -> TrackingState:
        now = now or now_local()
        with self._locks.hold(employee_id), employee_context(employee_id):
            state = self._tracking.get(employee_id).stopped(at=now)
            self._tracking.save(state)
            logger.info("Tracking status reset")
            return state

    def close_all_sessions(self, employee_id: str, *, now: Optional[datetime] = None) -> int:
        now = now or now_local()
        with self._locks.hold(employee_id), employee_context(employee_id):
            closed = 0
            for session in self._sessions.list_open_sessions(employee_id):
                self._sessions.close_session(session.session_id, session.clamp_check_out(now))
                closed += 1
            self._tracking.save(self._tracking.get(employee_id).stopped(at=now))
            logger.info("Closed %d active session(s)", closed)
            return closed

    def history(self, employee_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceSession]:
        return self._sessions.get_recent_for_employee(employee_id, limit)
