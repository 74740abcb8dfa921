from __future__ import annotations

from typing import Optional

from ...common.datetime_utils import minutes_between, minutes_from_midnight
from ...core.constants import (
    HALF_DAY_OUT_MIN_DURATION_MINUTES,
    LATE_OUT_WINDOW_MINUTES,
    MISSED_PUNCH_WINDOW_MINUTES,
)
from ...core.enums import StatusTag
from ..model import DailyStatusResult
from .base import StatusDraft, StatusRule


class CheckOutRule(StatusRule):
    """Departure tags.

    Without a check-out the only wall-clock reads happen here: a day other
    than today is a missed punch, today is "Working" until an hour after
    the shift ends.
    """

    def apply(self, draft: StatusDraft) -> Optional[DailyStatusResult]:
        policy = draft.policy
        attendance = draft.attendance

        if attendance.check_out_time is None:
            if draft.work_date != draft.now.date():
                draft.add(StatusTag.MISSED_PUNCH_OUT)
            elif minutes_from_midnight(draft.now) > policy.work_end_minutes + MISSED_PUNCH_WINDOW_MINUTES:
                draft.add(StatusTag.MISSED_PUNCH_OUT)
            else:
                draft.add(StatusTag.WORKING)
            return None

        check_out = minutes_from_midnight(attendance.check_out_time)
        if check_out < policy.work_end_minutes:
            draft.add(StatusTag.EARLY_OUT)
            worked = minutes_between(attendance.check_in_time, attendance.check_out_time)
            if worked < HALF_DAY_OUT_MIN_DURATION_MINUTES:
                draft.add(StatusTag.HALF_DAY_OUT)
        elif check_out > policy.work_end_minutes + LATE_OUT_WINDOW_MINUTES:
            draft.add(StatusTag.LATE_OUT)
        return None
