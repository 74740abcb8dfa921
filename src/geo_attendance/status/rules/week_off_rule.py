from __future__ import annotations

from typing import Optional

from ...core.enums import StatusColor, StatusTag
from ..model import DailyStatusResult
from .base import StatusDraft, StatusRule

SUNDAY = 6


class WeekOffRule(StatusRule):
    """Sunday is the weekly off day."""

    def apply(self, draft: StatusDraft) -> Optional[DailyStatusResult]:
        if draft.work_date.weekday() != SUNDAY:
            return None
        if draft.attendance is None:
            draft.tags[:] = [StatusTag.WEEK_OFF]
            return draft.finish(StatusColor.GRAY, remarks="Sunday Holiday")
        draft.add(StatusTag.WEEK_OFF_WORKED)
        return None
