from __future__ import annotations

from typing import Any, Optional, Protocol

from ..geofence.model import Fence


class SettingsRepository(Protocol):
    def get_attendance_settings(self) -> Optional[dict[str, Any]]:
        """Raw attendance-policy row, or None when never configured."""

        raise NotImplementedError

    def get_global_fence(self) -> Optional[Fence]:
        """Legacy single-office fence used when no branch fence applies."""

        raise NotImplementedError
