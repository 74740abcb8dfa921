from __future__ import annotations

from typing import Sequence

from ...core.constants import ADVANCE_DEDUCTION_PRECISION
from ...requests.model import Request
from .base import PayrollCalculator


class AdvanceDeductionCalculator(PayrollCalculator):
    """Net = gross - approved advances. Not clamped; a negative net is carried over by HR."""

    @staticmethod
    def advance_total(advances: Sequence[Request]) -> float:
        return round(sum(float(a.amount or 0) for a in advances), ADVANCE_DEDUCTION_PRECISION)

    def net_pay(self, gross: float, advances: Sequence[Request]) -> float:
        return round(float(gross) - self.advance_total(advances), ADVANCE_DEDUCTION_PRECISION)
