"""
Domain error taxonomy.

Services raise these instead of HTTPException; main.py renders them as
``{"detail": message, "code": code}`` with the matching status code.
"""


class AppError(Exception):
    """Base class for every error surfaced to API callers."""

    status_code: int = 500
    code: str = "internal"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(AppError):
    status_code = 401
    code = "unauthorized"
    default_message = "Not authenticated"


class Forbidden(AppError):
    status_code = 403
    code = "forbidden"
    default_message = "Not allowed"


class NotFound(AppError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class InvalidInput(AppError):
    status_code = 400
    code = "invalid_input"
    default_message = "Invalid input"


class InvalidState(AppError):
    """Illegal status transition."""

    status_code = 400
    code = "invalid_state"
    default_message = "Invalid state transition"


class InvalidOperation(AppError):
    """Operation not permitted for this kind of entity (e.g. returning a consumable)."""

    status_code = 400
    code = "invalid_operation"
    default_message = "Operation not permitted"


class CapacityExceeded(AppError):
    status_code = 400
    code = "capacity_exceeded"
    default_message = "Package employee limit reached"


class Conflict(AppError):
    """Lost a race against a concurrent update or hit a uniqueness constraint."""

    status_code = 409
    code = "conflict"
    default_message = "Conflicting concurrent update"


class Internal(AppError):
    status_code = 500
    code = "internal"
    default_message = "Internal server error"
