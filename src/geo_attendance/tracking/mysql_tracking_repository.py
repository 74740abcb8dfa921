from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AutoCheckoutReason
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone, row_coordinates
from .model import LocationPing, TrackingState
from .repository import PingLogRepository, TrackingStateRepository


class MySQLTrackingStateRepository(TrackingStateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: str) -> TrackingState:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, is_tracking, last_lat, last_lng, last_ping_time,
                       is_inside_geofence, outside_geofence_count,
                       tracking_start_time, tracking_end_time, auto_checkout_reason
                FROM tracking_state
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            if not r:
                return TrackingState(employee_id=employee_id)
            return TrackingState(
                employee_id=str(r["employee_id"]),
                is_tracking=as_bool(r.get("is_tracking")),
                last_location=row_coordinates(r, "last_lat", "last_lng"),
                last_ping_time=r.get("last_ping_time"),
                is_inside_geofence=as_bool(r.get("is_inside_geofence")),
                outside_geofence_count=int(r.get("outside_geofence_count") or 0),
                tracking_start_time=r.get("tracking_start_time"),
                tracking_end_time=r.get("tracking_end_time"),
                auto_checkout_reason=(
                    AutoCheckoutReason(r["auto_checkout_reason"]) if r.get("auto_checkout_reason") else None
                ),
            )

    def save(self, state: TrackingState) -> None:
        loc = state.last_location
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tracking_state(
                    employee_id, is_tracking, last_lat, last_lng, last_ping_time,
                    is_inside_geofence, outside_geofence_count,
                    tracking_start_time, tracking_end_time, auto_checkout_reason
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    is_tracking=VALUES(is_tracking),
                    last_lat=VALUES(last_lat),
                    last_lng=VALUES(last_lng),
                    last_ping_time=VALUES(last_ping_time),
                    is_inside_geofence=VALUES(is_inside_geofence),
                    outside_geofence_count=VALUES(outside_geofence_count),
                    tracking_start_time=VALUES(tracking_start_time),
                    tracking_end_time=VALUES(tracking_end_time),
                    auto_checkout_reason=VALUES(auto_checkout_reason)
                """,
                (
                    state.employee_id,
                    int(state.is_tracking),
                    loc.latitude if loc else None,
                    loc.longitude if loc else None,
                    state.last_ping_time,
                    int(state.is_inside_geofence),
                    int(state.outside_geofence_count),
                    state.tracking_start_time,
                    state.tracking_end_time,
                    state.auto_checkout_reason.value if state.auto_checkout_reason else None,
                ),
            )


class MySQLPingLogRepository(PingLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_ping(r: dict) -> LocationPing:
        return LocationPing(
            ping_id=int(r["ping_id"]),
            employee_id=str(r["employee_id"]),
            location=row_coordinates(r, "latitude", "longitude"),
            is_inside_geofence=as_bool(r.get("is_inside_geofence")),
            distance_meters=float(r["distance_meters"]) if r.get("distance_meters") is not None else None,
            timestamp=r["ping_time"],
            fence_id=r.get("fence_id"),
        )

    def append_ping(self, ping: LocationPing) -> LocationPing:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO location_pings(
                    employee_id, fence_id, latitude, longitude,
                    is_inside_geofence, distance_meters, ping_time, ping_date
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    ping.employee_id,
                    ping.fence_id,
                    ping.location.latitude,
                    ping.location.longitude,
                    int(ping.is_inside_geofence),
                    ping.distance_meters,
                    ping.timestamp,
                    ping.work_date,
                ),
            )
            ping_id = int(cur.lastrowid)
        return LocationPing(
            ping_id=ping_id,
            employee_id=ping.employee_id,
            location=ping.location,
            is_inside_geofence=ping.is_inside_geofence,
            distance_meters=ping.distance_meters,
            timestamp=ping.timestamp,
            fence_id=ping.fence_id,
        )

    def list_pings_for_date(self, employee_id: str, work_date: date) -> Sequence[LocationPing]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ping_id, employee_id, fence_id, latitude, longitude,
                       is_inside_geofence, distance_meters, ping_time
                FROM location_pings
                WHERE employee_id=%s AND ping_date=%s
                ORDER BY ping_time, ping_id
                """,
                (employee_id, work_date),
            )
            return [self._to_ping(r) for r in fetchall(cur)]
