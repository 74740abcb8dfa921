from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FaceMatch:
    """Best match returned by the face service. ``similarity`` is a 0-100 score."""

    employee_id: str
    similarity: float
