from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when an employee is not allowed to perform an action."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, session or request does not exist."""


class FaceNotRecognizedError(NotFoundError):
    """The identity match service found nobody for the submitted image."""


class NoOpenSessionError(ValidationError):
    """Check-out attempted while the employee has no open session."""


class DuplicateCheckInError(ValidationError):
    """Check-in attempted while a session opened today is still open."""

    def __init__(self, message: str, *, check_in_time=None):
        super().__init__(message)
        self.check_in_time = check_in_time


class GeofenceViolationError(ValidationError):
    """Office check-in from outside the resolved fence."""

    def __init__(self, message: str, *, distance_meters: float, allowed_radius: float):
        super().__init__(message)
        self.distance_meters = distance_meters
        self.allowed_radius = allowed_radius


class StaleSessionError(DomainError):
    """Open session belongs to a previous calendar day.

    Handled by closing the session before the new check-in proceeds.
    """

    def __init__(self, message: str, *, session_id: Optional[str] = None):
        super().__init__(message)
        self.session_id = session_id
