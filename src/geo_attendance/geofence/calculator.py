"""Great-circle geofence math.

Pure functions, no validation: NaN coordinates give a NaN distance and a
point that is never inside.
"""

from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt
from typing import Iterable

from ..core.constants import EARTH_RADIUS_METERS
from .model import Coordinates, Fence, FenceCheck, GeofenceResult


def distance_meters(a: Coordinates, b: Coordinates) -> float:
    lat1 = radians(a.latitude)
    lat2 = radians(b.latitude)
    delta_lat = radians(b.latitude - a.latitude)
    delta_lng = radians(b.longitude - a.longitude)

    h = sin(delta_lat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(delta_lng / 2) ** 2
    # Rounding can push h a hair above 1 for antipodal points.
    if h > 1.0:
        h = 1.0
    c = 2 * atan2(sqrt(h), sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def is_inside(point: Coordinates, fence_center: Coordinates, radius_meters: float) -> FenceCheck:
    distance = distance_meters(point, fence_center)
    return FenceCheck(is_within=distance <= radius_meters, distance_meters=distance)


def check_geofence(point: Coordinates, fences: Iterable[Fence]) -> GeofenceResult:
    closest = None
    min_distance = None
    within_any = False

    for fence in fences:
        check = is_inside(point, fence.center, fence.radius_meters)
        if min_distance is None or check.distance_meters < min_distance:
            min_distance = check.distance_meters
            closest = fence
        if check.is_within:
            within_any = True

    if closest is None:
        return GeofenceResult(is_within=True, distance_meters=None, closest_fence=None, is_configured=False)

    return GeofenceResult(is_within=within_any, distance_meters=min_distance, closest_fence=closest)
