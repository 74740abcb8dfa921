from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import RequestType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..requests.model import Request
from ..requests.repository import RequestRepository
from .calculator.advance_deduction_calculator import AdvanceDeductionCalculator
from .calculator.base import PayrollCalculator


@dataclass(frozen=True)
class Payslip:
    employee_id: str
    year: int
    month: int
    gross: float
    advance_total: float
    net: float
    advances: tuple[Request, ...] = ()

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "year": self.year,
            "month": self.month,
            "gross": self.gross,
            "advanceDeduction": self.advance_total,
            "net": self.net,
            "advances": [a.request_id for a in self.advances],
        }


class PayrollService:
    def __init__(
        self,
        employees: EmployeeRepository,
        requests: RequestRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._employees = employees
        self._requests = requests
        self._calculator = calculator or AdvanceDeductionCalculator()

    def monthly_payslip(self, employee_id: str, *, year: int, month: int) -> Payslip:
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        first = date(int(year), int(month), 1)
        last = date(int(year), int(month), calendar.monthrange(int(year), int(month))[1])
        advances = tuple(
            self._requests.list_approved(RequestType.ADVANCE, first, last, employee_id=employee_id)
        )

        gross = float(employee.fixed_salary or 0)
        advance_total = sum(float(a.amount or 0) for a in advances)
        return Payslip(
            employee_id=employee_id,
            year=int(year),
            month=int(month),
            gross=gross,
            advance_total=advance_total,
            net=self._calculator.net_pay(gross, advances),
            advances=advances,
        )
