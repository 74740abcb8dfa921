from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import require_coordinates


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    @classmethod
    def from_client(cls, latitude, longitude) -> "Coordinates":
        """Build from request values, rejecting missing or out-of-range input."""
        return cls(*require_coordinates(latitude, longitude))


@dataclass(frozen=True)
class Fence:
    """Circular boundary around a branch (or the global office fallback)."""

    fence_id: str
    name: str
    center: Coordinates
    radius_meters: float
    branch_id: Optional[str] = None
    is_active: bool = True
    address: Optional[str] = None


@dataclass(frozen=True)
class FenceCheck:
    is_within: bool
    distance_meters: float


@dataclass(frozen=True)
class GeofenceResult:
    """Membership across several fences.

    ``closest_fence`` is the minimum-distance fence whether or not the point
    is inside it. With no fences configured every location is allowed.
    """

    is_within: bool
    distance_meters: Optional[float]
    closest_fence: Optional[Fence]
    is_configured: bool = True

    @property
    def allowed_radius(self) -> Optional[float]:
        return self.closest_fence.radius_meters if self.closest_fence else None

    def message(self) -> str:
        if not self.is_configured:
            return "Geo-fence not configured. All locations allowed."
        name = self.closest_fence.name if self.closest_fence else "-"
        if self.is_within:
            return f"You are within {name}"
        return f"You are too far! Nearest: {name} ({round(self.distance_meters)}m away)"
