from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

from ..core.constants import (
    DEFAULT_OUTSIDE_PING_THRESHOLD,
    DEFAULT_RESUME_WINDOW_MINUTES,
    DEFAULT_STALE_AFTER_MINUTES,
)
from ..core.enums import AutoCheckoutReason, TrackingPhase
from ..geofence.model import Coordinates


@dataclass(frozen=True)
class TrackingConfig:
    outside_ping_threshold: int = DEFAULT_OUTSIDE_PING_THRESHOLD
    stale_after_minutes: int = DEFAULT_STALE_AFTER_MINUTES
    resume_window_minutes: int = DEFAULT_RESUME_WINDOW_MINUTES


@dataclass(frozen=True)
class TrackingState:
    """Live per-employee tracking fields, stored apart from the employee record.

    ``outside_geofence_count`` is 0 whenever ``is_inside_geofence`` is true.
    """

    employee_id: str
    is_tracking: bool = False
    last_location: Optional[Coordinates] = None
    last_ping_time: Optional[datetime] = None
    is_inside_geofence: bool = False
    outside_geofence_count: int = 0
    tracking_start_time: Optional[datetime] = None
    tracking_end_time: Optional[datetime] = None
    auto_checkout_reason: Optional[AutoCheckoutReason] = None

    @property
    def phase(self) -> TrackingPhase:
        if not self.is_tracking:
            return TrackingPhase.NOT_TRACKING
        if self.is_inside_geofence:
            return TrackingPhase.TRACKING_INSIDE
        return TrackingPhase.TRACKING_OUTSIDE

    def started(self, *, location: Coordinates, at: datetime) -> "TrackingState":
        return replace(
            self,
            is_tracking=True,
            last_location=location,
            last_ping_time=at,
            tracking_start_time=at,
            tracking_end_time=None,
            is_inside_geofence=True,
            outside_geofence_count=0,
            auto_checkout_reason=None,
        )

    def stopped(self, *, at: datetime, reason: Optional[AutoCheckoutReason] = None) -> "TrackingState":
        return replace(self, is_tracking=False, tracking_end_time=at, auto_checkout_reason=reason)

    def resumed(self, *, at: datetime) -> "TrackingState":
        """Continue the open session after a tracking gap; the fence counters are kept."""
        return replace(
            self,
            is_tracking=True,
            last_ping_time=at,
            tracking_start_time=at,
            tracking_end_time=None,
            auto_checkout_reason=None,
        )


@dataclass(frozen=True)
class LocationPing:
    """Immutable audit record of one processed ping."""

    employee_id: str
    location: Coordinates
    is_inside_geofence: bool
    distance_meters: Optional[float]
    timestamp: datetime
    fence_id: Optional[str] = None
    ping_id: Optional[int] = None

    @property
    def work_date(self) -> date:
        return self.timestamp.date()


@dataclass(frozen=True)
class PingResult:
    tracking: bool
    auto_checked_out: bool = False
    distance_meters: Optional[float] = None
    inside_fence: bool = False
    outside_geofence_count: int = 0
    closest_fence_id: Optional[str] = None
    rejected: bool = False
    message: str = ""

    def to_dict(self) -> dict:
        return {
            "tracking": self.tracking,
            "autoCheckedOut": self.auto_checked_out,
            "distance": round(self.distance_meters) if self.distance_meters is not None else None,
            "insideFence": self.inside_fence,
            "outsideGeofenceCount": self.outside_geofence_count,
            "message": self.message,
        }


@dataclass(frozen=True)
class WorkSummary:
    """Ping-based time on site: every inside ping counts as one minute."""

    employee_id: str
    work_date: date
    total_pings: int
    pings_inside: int
    pings_outside: int
    formatted_duration: str = field(default="0h 0m")

    @property
    def work_minutes(self) -> int:
        return self.pings_inside
