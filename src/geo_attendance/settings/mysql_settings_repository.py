from __future__ import annotations

from typing import Any, Optional

from ..core.constants import DEFAULT_FENCE_RADIUS_METERS
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time, row_coordinates
from ..geofence.model import Fence
from .repository import SettingsRepository

GLOBAL_FENCE_ID = "geo-fence-config"


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_attendance_settings(self) -> Optional[dict[str, Any]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT work_start_time, work_end_time, late_threshold_minutes, half_day_threshold_minutes
                FROM attendance_settings
                WHERE setting_id=1
                """
            )
            r = fetchone(cur)
            if not r:
                return None

            out: dict[str, Any] = {}
            for key in ("work_start_time", "work_end_time"):
                t = normalize_mysql_time(r.get(key))
                if t is not None:
                    out[key] = t.strftime("%H:%M")
            for key in ("late_threshold_minutes", "half_day_threshold_minutes"):
                if r.get(key) is not None:
                    out[key] = int(r[key])
            return out

    def get_global_fence(self) -> Optional[Fence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT office_lat, office_lng, radius_meters, office_address
                FROM geofence_settings
                WHERE setting_id=%s
                """,
                (GLOBAL_FENCE_ID,),
            )
            r = fetchone(cur)
            center = row_coordinates(r, "office_lat", "office_lng") if r else None
            if center is None:
                return None
            return Fence(
                fence_id=GLOBAL_FENCE_ID,
                name="Office",
                center=center,
                radius_meters=float(r.get("radius_meters") or DEFAULT_FENCE_RADIUS_METERS),
                address=r.get("office_address"),
            )
