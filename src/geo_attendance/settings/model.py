from __future__ import annotations

from dataclasses import dataclass

from ..common.datetime_utils import parse_hhmm
from ..core.constants import (
    DEFAULT_HALF_DAY_THRESHOLD_MINUTES,
    DEFAULT_LATE_THRESHOLD_MINUTES,
    DEFAULT_WORK_END_TIME,
    DEFAULT_WORK_START_TIME,
    GRACE_MINUTES,
)


@dataclass(frozen=True)
class AttendancePolicy:
    """Attendance thresholds resolved once per request.

    ``late_threshold_minutes`` is carried for display; lateness itself is
    decided from the work start time plus the fixed grace period.
    """

    work_start_time: str = DEFAULT_WORK_START_TIME
    work_end_time: str = DEFAULT_WORK_END_TIME
    late_threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES
    half_day_threshold_minutes: int = DEFAULT_HALF_DAY_THRESHOLD_MINUTES
    grace_minutes: int = GRACE_MINUTES

    @property
    def work_start_minutes(self) -> int:
        return parse_hhmm(self.work_start_time)

    @property
    def work_end_minutes(self) -> int:
        return parse_hhmm(self.work_end_time)

    @property
    def late_cutoff_minutes(self) -> int:
        return self.work_start_minutes + self.grace_minutes
