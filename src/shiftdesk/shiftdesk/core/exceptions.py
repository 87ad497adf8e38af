from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRecord(ValidationError):
    """Raised when a shift record would become inconsistent."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class AuthenticationError(DomainError):
    """Raised when the caller is not signed in."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class GeofenceError(DomainError):
    """Base for check-in/check-out rejections caused by the device location."""


class LocationUnavailable(GeofenceError):
    def __init__(self, message: str = "Không thể lấy vị trí của bạn. Vui lòng bật dịch vụ vị trí."):
        super().__init__(message)


class OutOfRange(GeofenceError):
    def __init__(self, radius_meters: float, distance_meters: float | None = None):
        self.radius_meters = radius_meters
        self.distance_meters = distance_meters
        super().__init__(
            f"Bạn đang ở quá xa vị trí văn phòng. Khoảng cách cho phép là {radius_meters:g}m."
        )
