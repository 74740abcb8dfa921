from __future__ import annotations

from typing import Optional, Protocol

from .model import FaceMatch


class FaceMatcher(Protocol):
    """External identity match service (enrollment and liveness live elsewhere)."""

    def match_face(self, image: bytes) -> Optional[FaceMatch]:
        """Best match for the face in ``image``, or None when nobody matches."""

        raise NotImplementedError
