"""Presence state machine driven by location pings.

States per employee: NOT_TRACKING, TRACKING_INSIDE and TRACKING_OUTSIDE(count).
A run of ``outside_ping_threshold`` consecutive outside pings (about five
minutes at one ping a minute) closes the open session. Duplicate deliveries
are not de-duplicated, so a re-sent outside ping counts twice.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from ..attendance.model import AttendanceSession
from ..attendance.repository import SessionRepository
from ..common.datetime_utils import now_local
from ..core.enums import AutoCheckoutReason
from ..geofence.model import Coordinates
from ..geofence.service import GeofenceService
from ..logging_config import employee_context, get_logger
from .locks import EmployeeLocks
from .model import LocationPing, PingResult, TrackingConfig, TrackingState
from .repository import PingLogRepository, TrackingStateRepository

logger = get_logger(__name__)


def _latest(*values: Optional[datetime]) -> Optional[datetime]:
    present = [v for v in values if v is not None]
    return max(present) if present else None


class PresenceStateMachine:
    def __init__(
        self,
        tracking: TrackingStateRepository,
        sessions: SessionRepository,
        pings: PingLogRepository,
        geofence: GeofenceService,
        *,
        config: Optional[TrackingConfig] = None,
        locks: Optional[EmployeeLocks] = None,
    ):
        self._tracking = tracking
        self._sessions = sessions
        self._pings = pings
        self._geofence = geofence
        self._config = config or TrackingConfig()
        self._locks = locks or EmployeeLocks()

    @property
    def config(self) -> TrackingConfig:
        return self._config

    def handle_ping(
        self,
        employee_id: str,
        location: Coordinates,
        timestamp: Optional[datetime] = None,
    ) -> PingResult:
        timestamp = timestamp or now_local()

        with self._locks.hold(employee_id), employee_context(employee_id):
            state = self._tracking.get(employee_id)
            if not state.is_tracking:
                logger.debug("Ping rejected, not tracking")
                return PingResult(tracking=False, rejected=True, message="not tracking")

            floor = _latest(state.last_ping_time, state.tracking_start_time)
            if floor is not None and timestamp < floor:
                # Buffered pings from before the current tracking run must not move the clock back.
                logger.info("Ping at %s older than %s ignored", timestamp, floor)
                return PingResult(
                    tracking=True,
                    inside_fence=state.is_inside_geofence,
                    outside_geofence_count=state.outside_geofence_count,
                    rejected=True,
                    message="out of order",
                )

            geo = self._geofence.check(location)
            fence_id = geo.closest_fence.fence_id if geo.closest_fence else None
            state = replace(state, last_location=location, last_ping_time=timestamp)
            auto_checked_out = False

            if geo.is_within:
                state = replace(state, is_inside_geofence=True, outside_geofence_count=0)
            else:
                count = state.outside_geofence_count + 1
                state = replace(state, is_inside_geofence=False, outside_geofence_count=count)
                if count >= self._config.outside_ping_threshold:
                    state = self._auto_checkout(state, at=timestamp)
                    auto_checked_out = True

            self._tracking.save(state)
            self._pings.append_ping(
                LocationPing(
                    employee_id=employee_id,
                    location=location,
                    is_inside_geofence=geo.is_within,
                    distance_meters=geo.distance_meters,
                    timestamp=timestamp,
                    fence_id=fence_id,
                )
            )

        if auto_checked_out:
            message = "Auto checked out: outside geofence"
        elif geo.is_within:
            message = "inside"
        else:
            message = f"outside ({state.outside_geofence_count}/{self._config.outside_ping_threshold})"

        return PingResult(
            tracking=state.is_tracking,
            auto_checked_out=auto_checked_out,
            distance_meters=geo.distance_meters,
            inside_fence=geo.is_within,
            outside_geofence_count=state.outside_geofence_count,
            closest_fence_id=fence_id,
            message=message,
        )

    def _auto_checkout(self, state: TrackingState, *, at: datetime) -> TrackingState:
        closed = 0
        for session in self._sessions.list_open_sessions(state.employee_id):
            self._sessions.close_session(
                session.session_id, session.clamp_check_out(at), reason=AutoCheckoutReason.OUTSIDE_GEOFENCE
            )
            closed += 1
        logger.info(
            "Auto-checkout after %d pings outside geofence (closed %d session(s))",
            state.outside_geofence_count,
            closed,
        )
        return state.stopped(at=at, reason=AutoCheckoutReason.OUTSIDE_GEOFENCE)

    # --- read-time checks -------------------------------------------------

    def is_stale(self, state: TrackingState, now: datetime) -> bool:
        if not state.is_tracking or state.last_ping_time is None:
            return False
        return now - state.last_ping_time > timedelta(minutes=self._config.stale_after_minutes)

    def apply_staleness(self, state: TrackingState, now: datetime) -> tuple[TrackingState, bool]:
        """Stop tracking a client that went silent; the open session stays open.

        ``last_ping_time`` is kept so the resume window can be measured from it.
        """
        if not self.is_stale(state, now):
            return state, False
        return replace(state, is_tracking=False, auto_checkout_reason=AutoCheckoutReason.INACTIVITY), True

    def refresh_staleness(self, employee_id: str, now: Optional[datetime] = None) -> tuple[TrackingState, bool]:
        now = now or now_local()
        with self._locks.hold(employee_id), employee_context(employee_id):
            state = self._tracking.get(employee_id)
            state, flipped = self.apply_staleness(state, now)
            if flipped:
                idle = (now - state.last_ping_time).total_seconds() / 60
                logger.info("Inactive for %d mins, stopping tracking", round(idle))
                self._tracking.save(state)
            return state, flipped

    def can_resume(
        self,
        state: TrackingState,
        today_open_session: Optional[AttendanceSession],
        now: datetime,
    ) -> bool:
        if state.is_tracking or today_open_session is None:
            return False
        if state.last_ping_time is None:
            return True
        return now - state.last_ping_time < timedelta(minutes=self._config.resume_window_minutes)
