from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...requests.model import Request


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def net_pay(self, gross: float, advances: Sequence[Request]) -> float:
        raise NotImplementedError
