from __future__ import annotations

import math

from ..core.exceptions import ValidationError


def require_coordinates(latitude, longitude) -> tuple[float, float]:
    """Validate a client-supplied lat/lng pair.

    Geofence math itself never validates; callers at the edge do.
    """
    if latitude is None or longitude is None:
        raise ValidationError("Latitude and longitude are required")
    try:
        lat = float(latitude)
        lng = float(longitude)
    except (TypeError, ValueError):
        raise ValidationError("Latitude and longitude must be numbers")
    if math.isnan(lat) or math.isnan(lng) or not (-90 <= lat <= 90) or not (-180 <= lng <= 180):
        raise ValidationError("Latitude/longitude out of range")
    return lat, lng
