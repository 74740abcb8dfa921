from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .rules.absence_rule import AbsenceRule
from .rules.base import StatusRule
from .rules.check_in_rule import CheckInRule
from .rules.check_out_rule import CheckOutRule
from .rules.leave_rule import LeaveRule
from .rules.week_off_rule import WeekOffRule


@dataclass
class StatusRuleFactory:
    """Factory Pattern: build the ordered rule chain. Order is significant."""

    def build(self) -> Sequence[StatusRule]:
        return (
            WeekOffRule(),
            LeaveRule(),
            AbsenceRule(),
            CheckInRule(),
            CheckOutRule(),
        )
