from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import LocationPing, TrackingState


class TrackingStateRepository(Protocol):
    def get(self, employee_id: str) -> TrackingState:
        """Stored state, or a fresh not-tracking state for unknown employees."""

        raise NotImplementedError

    def save(self, state: TrackingState) -> None:
        raise NotImplementedError


class PingLogRepository(Protocol):
    def append_ping(self, ping: LocationPing) -> LocationPing:
        raise NotImplementedError

    def list_pings_for_date(self, employee_id: str, work_date: date) -> Sequence[LocationPing]:
        """Pings of one day, oldest first."""

        raise NotImplementedError
