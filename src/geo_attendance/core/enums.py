from __future__ import annotations

from enum import Enum


class SessionType(str, Enum):
    """Kind of check-in: at a fenced office or on duty elsewhere."""

    OFFICE = "OFFICE"
    TRAVEL = "TRAVEL"


class WorkMode(str, Enum):
    OFFICE = "OFFICE"
    FIELD_SALES = "FIELD_SALES"
    REMOTE = "REMOTE"


class RequestType(str, Enum):
    LEAVE = "LEAVE"
    PERMISSION = "PERMISSION"
    ADVANCE = "ADVANCE"


class RequestStatus(str, Enum):
    """Approval workflow state. Decided requests never go back to PENDING."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TrackingPhase(str, Enum):
    NOT_TRACKING = "NOT_TRACKING"
    TRACKING_INSIDE = "TRACKING_INSIDE"
    TRACKING_OUTSIDE = "TRACKING_OUTSIDE"


class AutoCheckoutReason(str, Enum):
    OUTSIDE_GEOFENCE = "outside_geofence"
    INACTIVITY = "inactivity"


class StatusColor(str, Enum):
    GREEN = "green"
    RED = "red"
    ORANGE = "orange"
    BLUE = "blue"
    GRAY = "gray"


class StatusTag(str, Enum):
    """Closed set of daily attendance labels.

    The value is the label shown in reports; ``color`` is the bucket a tag
    pulls the day into (``None`` for neutral tags).
    """

    WEEK_OFF = "Week off"
    WEEK_OFF_WORKED = "Week off worked"
    LEAVE = "Leave"
    PRESENT_ON_LEAVE = "Present (On Leave)"
    ABSENT = "Absent"
    PERMISSION_IN = "Permission in"
    LATE_IN = "Late in"
    HALF_DAY_IN = "Half day in"
    EARLY_IN = "Early in"
    MISSED_PUNCH_OUT = "Shift out punch not done"
    WORKING = "Working"
    EARLY_OUT = "Early out"
    HALF_DAY_OUT = "Half day out"
    LATE_OUT = "Late out"
    PRESENT = "Present"

    @property
    def color(self) -> StatusColor | None:
        return _TAG_COLORS.get(self)


_TAG_COLORS = {
    StatusTag.ABSENT: StatusColor.RED,
    StatusTag.MISSED_PUNCH_OUT: StatusColor.RED,
    StatusTag.LATE_IN: StatusColor.ORANGE,
    StatusTag.EARLY_OUT: StatusColor.ORANGE,
    StatusTag.HALF_DAY_IN: StatusColor.ORANGE,
    StatusTag.HALF_DAY_OUT: StatusColor.ORANGE,
    StatusTag.LEAVE: StatusColor.BLUE,
}

# Later entries override earlier ones when a day carries several colored tags.
COLOR_PRECEDENCE = (StatusColor.GREEN, StatusColor.RED, StatusColor.ORANGE, StatusColor.BLUE)
