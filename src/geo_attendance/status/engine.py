from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..attendance.model import EffectiveAttendance
from ..common.datetime_utils import minutes_from_midnight, now_local
from ..core.enums import COLOR_PRECEDENCE, StatusColor, StatusTag
from ..requests.model import Request
from ..settings.model import AttendancePolicy
from .factory import StatusRuleFactory
from .model import DailyStatusResult
from .rules.base import StatusDraft, StatusRule


def derive_color(tags: Iterable[StatusTag]) -> StatusColor:
    """Highest-precedence color pulled in by any tag; green when none is."""

    present = {tag.color for tag in tags}
    color = StatusColor.GREEN
    for candidate in COLOR_PRECEDENCE:
        if candidate in present:
            color = candidate
    return color


def classify_check_in(check_in_time: datetime, policy: AttendancePolicy) -> str:
    """Status stored on a session at check-in time: present, late or half-day."""

    minutes = minutes_from_midnight(check_in_time)
    if minutes <= policy.late_threshold_minutes:
        return "present"
    if minutes <= policy.half_day_threshold_minutes:
        return "late"
    return "half-day"


class AttendanceStatusEngine:
    """Resolve the daily status of one employee-day.

    Pure apart from ``now``, which only matters when there is no check-out.
    """

    def __init__(self, *, rules: Optional[Sequence[StatusRule]] = None):
        self._rules = tuple(rules) if rules is not None else tuple(StatusRuleFactory().build())

    def compute(
        self,
        *,
        work_date: date,
        attendance: Optional[EffectiveAttendance],
        leave: Optional[Request] = None,
        permission: Optional[Request] = None,
        policy: Optional[AttendancePolicy] = None,
        now: Optional[datetime] = None,
    ) -> DailyStatusResult:
        draft = StatusDraft(
            work_date=work_date,
            attendance=attendance,
            leave=leave,
            permission=permission,
            policy=policy or AttendancePolicy(),
            now=now or now_local(),
        )

        for rule in self._rules:
            final = rule.apply(draft)
            if final is not None:
                return final

        if not draft.tags or draft.tags == [StatusTag.EARLY_IN]:
            draft.add(StatusTag.PRESENT)

        remarks = ", ".join(draft.remarks)
        if not remarks and StatusTag.PRESENT in draft.tags:
            remarks = "On Time"

        return DailyStatusResult(
            work_date=work_date,
            tags=tuple(draft.tags),
            remarks=remarks,
            color=derive_color(draft.tags),
            check_in_time=attendance.check_in_time if attendance else None,
            check_out_time=attendance.check_out_time if attendance else None,
        )
