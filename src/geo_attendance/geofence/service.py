from __future__ import annotations

from typing import Optional, Sequence

from ..employees.model import Employee
from ..logging_config import get_logger
from ..settings.repository import SettingsRepository
from .calculator import check_geofence
from .model import Coordinates, Fence, GeofenceResult
from .repository import FenceRepository

logger = get_logger(__name__)


class GeofenceService:
    """Which fences apply, for tracking pings and for check-in."""

    def __init__(self, fences: FenceRepository, settings: SettingsRepository):
        self._fences = fences
        self._settings = settings

    def active_fences(self) -> Sequence[Fence]:
        fences = list(self._fences.list_active_fences())
        if fences:
            return fences
        global_fence = self._settings.get_global_fence()
        return [global_fence] if global_fence else []

    def check(self, point: Coordinates) -> GeofenceResult:
        return check_geofence(point, self.active_fences())

    def resolve_check_in_fence(
        self,
        employee: Employee,
        *,
        selected_branch_id: Optional[str] = None,
    ) -> Optional[Fence]:
        """Assigned branch first, then the branch picked in the app, then the global office."""

        candidates = (
            ("ASSIGNED_BRANCH", employee.branch_id),
            ("SELECTED_BRANCH", selected_branch_id),
        )
        for source, branch_id in candidates:
            if not branch_id:
                continue
            fence = self._fences.get_fence(branch_id)
            if fence is not None:
                logger.info("Validating location against %s: %s", source, fence.name)
                return fence

        global_fence = self._settings.get_global_fence()
        if global_fence is not None:
            logger.info("Validating location against GLOBAL_OFFICE")
        return global_fence
