"""Domain exceptions raised by services and mapped to HTTP responses in ``main``.

Services never raise ``HTTPException`` themselves so they stay usable from
scripts and tests without a request context.
"""

from fastapi import status


class LodgeError(Exception):
    """Base class for all LodgeDesk domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.__class__.__doc__ or self.code
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# 400: malformed input
# ---------------------------------------------------------------------------


class ValidationError(LodgeError):
    """Invalid input."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"


class InvalidRange(ValidationError):
    """Check-out must be after check-in."""

    code = "invalid_range"


class MissingVariables(ValidationError):
    """Template variables are missing."""

    code = "missing_variables"

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing template variables: {', '.join(missing)}")


# ---------------------------------------------------------------------------
# 404: referenced record absent
# ---------------------------------------------------------------------------


class NotFoundError(LodgeError):
    """Resource not found."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class RoomNotFound(NotFoundError):
    """Room not found."""

    code = "room_not_found"


class GuestNotFound(NotFoundError):
    """Guest not found."""

    code = "guest_not_found"


class PaymentNotFound(NotFoundError):
    """Payment not found."""

    code = "payment_not_found"


class SettingsNotFound(NotFoundError):
    """Lodge settings have not been created yet."""

    code = "settings_not_found"


class TemplateNotFound(NotFoundError):
    """Notification template not found."""

    code = "template_not_found"


# ---------------------------------------------------------------------------
# 409: state conflicts
# ---------------------------------------------------------------------------


class ConflictError(LodgeError):
    """Request conflicts with the current state."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class RoomUnavailable(ConflictError):
    """Room is not available for the selected dates."""

    code = "room_unavailable"


class DuplicateRoomNumber(ConflictError):
    """Room number already exists."""

    code = "duplicate_room_number"


# ---------------------------------------------------------------------------
# 429 / 503
# ---------------------------------------------------------------------------


class RateLimited(LodgeError):
    """Rate limit exceeded. Please try again later."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "rate_limited"


class DependencyError(LodgeError):
    """A backing service is unavailable."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "dependency_error"
