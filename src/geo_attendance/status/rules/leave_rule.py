from __future__ import annotations

from typing import Optional

from ...core.enums import StatusColor, StatusTag
from ..model import DailyStatusResult
from .base import StatusDraft, StatusRule


class LeaveRule(StatusRule):
    def apply(self, draft: StatusDraft) -> Optional[DailyStatusResult]:
        if draft.leave is None:
            return None
        draft.add(StatusTag.LEAVE)
        draft.remark(draft.leave.leave_type or "")
        if draft.attendance is None:
            return draft.finish(StatusColor.ORANGE)
        draft.add(StatusTag.PRESENT_ON_LEAVE)
        return None
