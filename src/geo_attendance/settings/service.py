from __future__ import annotations

from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_hhmm
from ..logging_config import get_logger
from .model import AttendancePolicy
from .repository import SettingsRepository

logger = get_logger(__name__)


class PolicyProvider:
    """Resolve the attendance policy for one request.

    Status computation must keep working when the settings store is down, so
    every failure degrades to the configured defaults instead of raising.
    """

    def __init__(self, settings: SettingsRepository, *, defaults: Optional[Mapping[str, Any]] = None):
        self._settings = settings
        self._defaults = AttendancePolicy(**dict(defaults or {}))

    @property
    def defaults(self) -> AttendancePolicy:
        return self._defaults

    def resolve(self) -> AttendancePolicy:
        try:
            raw = self._settings.get_attendance_settings()
        except Exception:
            logger.warning("Attendance settings unavailable, using defaults", exc_info=True)
            return self._defaults

        if not raw:
            return self._defaults

        base = self._defaults
        return AttendancePolicy(
            work_start_time=self._time_or(raw.get("work_start_time"), base.work_start_time),
            work_end_time=self._time_or(raw.get("work_end_time"), base.work_end_time),
            late_threshold_minutes=self._int_or(raw.get("late_threshold_minutes"), base.late_threshold_minutes),
            half_day_threshold_minutes=self._int_or(
                raw.get("half_day_threshold_minutes"), base.half_day_threshold_minutes
            ),
            grace_minutes=base.grace_minutes,
        )

    @staticmethod
    def _time_or(value: Any, fallback: str) -> str:
        if not value:
            return fallback
        try:
            parse_hhmm(str(value))
        except ValueError:
            logger.warning("Ignoring invalid work time %r, using %s", value, fallback)
            return fallback
        return str(value).strip()

    @staticmethod
    def _int_or(value: Any, fallback: int) -> int:
        # 0 is treated as "not set", matching how the settings form stores blanks.
        try:
            return int(value) or fallback
        except (TypeError, ValueError):
            return fallback
