from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from ..geofence.model import Coordinates
from ..logging_config import get_logger
from .connection import DatabaseConnection

logger = get_logger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection per unit of work: commit on success, rollback and re-raise otherwise."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        logger.debug("Rolling back transaction on %s", conn_factory.config.database)
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def row_coordinates(row: Dict[str, Any], lat_key: str, lng_key: str) -> Optional[Coordinates]:
    """DECIMAL lat/lng column pair, or None when either side is NULL."""
    lat, lng = row.get(lat_key), row.get(lng_key)
    if lat is None or lng is None:
        return None
    return Coordinates(float(lat), float(lng))


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Work start/end columns are TIME.

    The connector hands them back as ``timedelta`` (C extension), ``time``
    or an ``HH:MM[:SS]`` string depending on version and settings.
    """

    if value is None or isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        minutes, seconds = divmod(int(value.total_seconds()) % 86400, 60)
        hours, minutes = divmod(minutes, 60)
        return time(hours, minutes, seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        seconds = int(parts[2]) if len(parts) > 2 and parts[2] else 0
        return time(int(parts[0]), int(parts[1]), seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def as_bool(value: Any) -> bool:
    """TINYINT(1) columns come back as 0/1 ints."""
    return bool(int(value)) if value is not None else False
