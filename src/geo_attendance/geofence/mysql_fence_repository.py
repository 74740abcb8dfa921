from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_FENCE_RADIUS_METERS
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone, row_coordinates
from .model import Fence
from .repository import FenceRepository


def _to_fence(r: dict) -> Optional[Fence]:
    center = row_coordinates(r, "latitude", "longitude")
    # Branches created without coordinates cannot act as a fence.
    if center is None:
        return None
    return Fence(
        fence_id=str(r["branch_id"]),
        name=r["name"],
        center=center,
        radius_meters=float(r.get("radius_meters") or DEFAULT_FENCE_RADIUS_METERS),
        branch_id=str(r["branch_id"]),
        is_active=as_bool(r.get("is_active")),
        address=r.get("address"),
    )


class MySQLFenceRepository(FenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_fences(self) -> Sequence[Fence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT branch_id, name, latitude, longitude, radius_meters, is_active, address
                FROM branches
                WHERE is_active=1
                ORDER BY branch_id
                """
            )
            fences = [_to_fence(r) for r in fetchall(cur)]
            return [f for f in fences if f is not None]

    def get_fence(self, fence_id: str) -> Optional[Fence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT branch_id, name, latitude, longitude, radius_meters, is_active, address
                FROM branches
                WHERE branch_id=%s
                """,
                (fence_id,),
            )
            r = fetchone(cur)
            return _to_fence(r) if r else None
