from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ...attendance.model import EffectiveAttendance
from ...core.enums import StatusColor, StatusTag
from ...requests.model import Request
from ...settings.model import AttendancePolicy
from ..model import DailyStatusResult


@dataclass
class StatusDraft:
    """Working state threaded through the rule chain for one employee-day."""

    work_date: date
    attendance: Optional[EffectiveAttendance]
    leave: Optional[Request]
    permission: Optional[Request]
    policy: AttendancePolicy
    now: datetime
    tags: list[StatusTag] = field(default_factory=list)
    remarks: list[str] = field(default_factory=list)

    def add(self, tag: StatusTag) -> None:
        if tag not in self.tags:
            self.tags.append(tag)

    def remark(self, text: str) -> None:
        if text:
            self.remarks.append(text)

    def finish(self, color: StatusColor, *, remarks: Optional[str] = None) -> DailyStatusResult:
        return DailyStatusResult(
            work_date=self.work_date,
            tags=tuple(self.tags),
            remarks=", ".join(self.remarks) if remarks is None else remarks,
            color=color,
        )


class StatusRule(ABC):
    """Chain of Responsibility step: append tags, or return a final result to stop."""

    @abstractmethod
    def apply(self, draft: StatusDraft) -> Optional[DailyStatusResult]:
        raise NotImplementedError
