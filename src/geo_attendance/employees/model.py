from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import WorkMode


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee identity.

    Live tracking fields are kept on ``TrackingState`` so that a ping never
    rewrites identity data.
    """

    employee_id: str
    name: str
    department: Optional[str] = None
    designation: Optional[str] = None
    branch_id: Optional[str] = None
    work_mode: WorkMode = WorkMode.OFFICE
    fixed_salary: float = 0.0
    is_active: bool = True
