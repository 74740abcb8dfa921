from __future__ import annotations

from typing import Optional

from ...core.enums import StatusColor, StatusTag
from ..model import DailyStatusResult
from .base import StatusDraft, StatusRule


class AbsenceRule(StatusRule):
    """No check-in on a working day without leave."""

    def apply(self, draft: StatusDraft) -> Optional[DailyStatusResult]:
        if draft.attendance is not None:
            return None
        draft.tags[:] = [StatusTag.ABSENT]
        return draft.finish(StatusColor.RED, remarks="No Check-in")
