from __future__ import annotations

import base64
import binascii
import re
from typing import Optional, Union

from ..core.constants import DEFAULT_MIN_FACE_SIMILARITY
from ..core.exceptions import AuthorizationError, FaceNotRecognizedError, ValidationError
from ..logging_config import get_logger
from .matcher import FaceMatcher

logger = get_logger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")


def decode_image(payload: Union[bytes, str, None]) -> bytes:
    """Accept raw bytes or a (data-URL) base64 string from the client."""

    if isinstance(payload, bytes):
        if not payload:
            raise ValidationError("Image is required")
        return payload
    if not payload:
        raise ValidationError("Image is required")
    try:
        return base64.b64decode(_DATA_URL_PREFIX.sub("", payload.strip()), validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Image is not valid base64")


class IdentityService:
    def __init__(self, matcher: FaceMatcher, *, min_similarity: float = DEFAULT_MIN_FACE_SIMILARITY):
        self._matcher = matcher
        self._min_similarity = float(min_similarity)

    def identify(self, image: Union[bytes, str], *, expected_employee_id: Optional[str] = None) -> str:
        match = self._matcher.match_face(decode_image(image))
        if match is None or match.similarity < self._min_similarity:
            raise FaceNotRecognizedError("Face not recognized. Please register first.")

        logger.info("Face recognized for %s (similarity %.1f)", match.employee_id, match.similarity)

        if expected_employee_id and match.employee_id != expected_employee_id:
            logger.warning("Face mismatch: expected %s, got %s", expected_employee_id, match.employee_id)
            raise AuthorizationError(
                f"Face verification failed. The face recognized belongs to {match.employee_id}, "
                f"but you are logged in as {expected_employee_id}."
            )
        return match.employee_id
