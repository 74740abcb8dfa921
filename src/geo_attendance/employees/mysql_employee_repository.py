from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import WorkMode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, name, department, designation, branch_id, work_mode, fixed_salary, is_active"


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=str(r["employee_id"]),
        name=r["name"],
        department=r.get("department"),
        designation=r.get("designation"),
        branch_id=r.get("branch_id"),
        work_mode=WorkMode(r.get("work_mode") or WorkMode.OFFICE.value),
        fixed_salary=float(r.get("fixed_salary") or 0),
        is_active=as_bool(r.get("is_active", 1)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_all(self, *, branch_id: Optional[str] = None) -> Sequence[Employee]:
        sql = f"SELECT {_COLUMNS} FROM employees WHERE is_active=1"
        params: tuple = ()
        if branch_id is not None:
            sql += " AND branch_id=%s"
            params = (branch_id,)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql + " ORDER BY employee_id", params)
            return [_to_employee(r) for r in fetchall(cur)]
