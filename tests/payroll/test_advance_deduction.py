from datetime import date

import pytest

from geo_attendance.core.enums import RequestType
from geo_attendance.core.exceptions import NotFoundError, ValidationError
from geo_attendance.payroll.calculator.advance_deduction_calculator import AdvanceDeductionCalculator
from geo_attendance.payroll.service import PayrollService

from fakes import InMemoryRequests, make_world


@pytest.fixture
def world():
    return make_world()


def _payroll(world):
    return PayrollService(world.employees, world.requests)


def test_approved_advances_in_month_are_deducted(world):
    world.requests.approved(RequestType.ADVANCE, "EMP001", date(2026, 3, 2), amount=1500)
    world.requests.approved(RequestType.ADVANCE, "EMP001", date(2026, 3, 31), amount=250.5)
    world.requests.approved(RequestType.ADVANCE, "EMP001", date(2026, 4, 1), amount=9999)

    slip = _payroll(world).monthly_payslip("EMP001", year=2026, month=3)

    assert slip.gross == 30000
    assert slip.advance_total == 1750.5
    assert slip.net == 28249.5
    assert slip.to_dict()["advances"] == ["R1", "R2"]


def test_net_may_go_negative():
    calc = AdvanceDeductionCalculator()
    advances = InMemoryRequests()
    big = advances.approved(RequestType.ADVANCE, "EMP001", date(2026, 3, 2), amount=1000.123)

    assert calc.advance_total([big]) == 1000.12
    assert calc.net_pay(500, [big]) == -500.12


def test_payslip_validation(world):
    with pytest.raises(ValidationError):
        _payroll(world).monthly_payslip("EMP001", year=2026, month=13)
    with pytest.raises(NotFoundError):
        _payroll(world).monthly_payslip("NOPE", year=2026, month=3)
