from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import format_hhmm
from ..core.enums import StatusColor, StatusTag


@dataclass(frozen=True)
class DailyStatusResult:
    """Derived classification of one employee-day. Never persisted."""

    work_date: date
    tags: tuple[StatusTag, ...]
    remarks: str
    color: StatusColor
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None

    @property
    def status(self) -> list[str]:
        return [t.value for t in self.tags]

    @property
    def times(self) -> dict:
        return {"in": format_hhmm(self.check_in_time), "out": format_hhmm(self.check_out_time)}

    def to_dict(self) -> dict:
        data = {"status": self.status, "remarks": self.remarks, "color": self.color.value}
        if self.check_in_time is not None:
            data["times"] = self.times
        return data
