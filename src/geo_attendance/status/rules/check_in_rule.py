from __future__ import annotations

from typing import Optional

from ...common.datetime_utils import minutes_from_midnight
from ...core.constants import EARLY_IN_WINDOW_MINUTES
from ...core.enums import StatusTag
from ..model import DailyStatusResult
from .base import StatusDraft, StatusRule


class CheckInRule(StatusRule):
    """Late / permitted-late / half-day arrival, or early arrival. Never both."""

    def apply(self, draft: StatusDraft) -> Optional[DailyStatusResult]:
        policy = draft.policy
        check_in = minutes_from_midnight(draft.attendance.check_in_time)

        if check_in > policy.late_cutoff_minutes:
            if draft.permission is not None:
                draft.add(StatusTag.PERMISSION_IN)
                draft.remark("Late entry permitted")
            else:
                draft.add(StatusTag.LATE_IN)
            if check_in > policy.half_day_threshold_minutes:
                draft.add(StatusTag.HALF_DAY_IN)
        elif check_in < policy.work_start_minutes - EARLY_IN_WINDOW_MINUTES:
            draft.add(StatusTag.EARLY_IN)
        return None
