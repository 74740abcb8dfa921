from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import StatusTag
from ..employees.model import Employee
from ..status.model import DailyStatusResult


@dataclass
class RangeStats:
    """Per-employee tag counts over a date range."""

    total_days: int
    present: int = 0
    absent: int = 0
    late_in: int = 0
    early_out: int = 0
    half_day: int = 0
    week_off: int = 0
    leave: int = 0
    permission: int = 0

    def record(self, result: DailyStatusResult) -> None:
        tags = set(result.tags)
        if StatusTag.PRESENT in tags or StatusTag.PRESENT_ON_LEAVE in tags:
            self.present += 1
        if StatusTag.ABSENT in tags:
            self.absent += 1
        if StatusTag.LATE_IN in tags:
            self.late_in += 1
        if StatusTag.EARLY_OUT in tags:
            self.early_out += 1
        if StatusTag.HALF_DAY_IN in tags or StatusTag.HALF_DAY_OUT in tags:
            self.half_day += 1
        if StatusTag.LEAVE in tags:
            self.leave += 1
        if StatusTag.PERMISSION_IN in tags:
            self.permission += 1
        if StatusTag.WEEK_OFF in tags:
            self.week_off += 1

    def to_dict(self) -> dict:
        return {
            "present": self.present,
            "absent": self.absent,
            "lateIn": self.late_in,
            "earlyOut": self.early_out,
            "halfDay": self.half_day,
            "weekOff": self.week_off,
            "leave": self.leave,
            "permission": self.permission,
            "totalDays": self.total_days,
        }


def _employee_dict(employee: Employee) -> dict:
    return {
        "employeeId": employee.employee_id,
        "name": employee.name,
        "department": employee.department,
        "designation": employee.designation,
    }


@dataclass(frozen=True)
class EmployeeDayReport:
    employee: Employee
    result: DailyStatusResult

    def to_dict(self) -> dict:
        return {**_employee_dict(self.employee), **self.result.to_dict()}


@dataclass(frozen=True)
class EmployeeRangeReport:
    employee: Employee
    stats: RangeStats
    daily: tuple[DailyStatusResult, ...] = field(default_factory=tuple)

    def breakdown(self) -> list[dict]:
        return [
            {
                "date": r.work_date.strftime("%Y-%m-%d"),
                "status": r.status,
                "remarks": r.remarks,
                "in": r.times["in"],
                "out": r.times["out"],
            }
            for r in self.daily
        ]

    def to_dict(self) -> dict:
        return {
            **_employee_dict(self.employee),
            "stats": self.stats.to_dict(),
            "dailyBreakdown": self.breakdown(),
        }
