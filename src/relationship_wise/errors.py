"""Domain errors raised by the store, guards and orchestrators.

Each error carries the HTTP status the route layer answers with. Messages are
safe to return to callers; provider-specific failure details are logged where
they are caught and never attached here.
"""


class CoachError(Exception):
    """Base class for request-scoped failures."""

    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(CoachError):
    """Unknown id, or an id owned by someone else (deliberately the same)."""

    status_code = 404
    default_message = "Resource not found"


class BadRequestError(CoachError):
    status_code = 400
    default_message = "Bad request"


class UnauthenticatedError(CoachError):
    status_code = 401
    default_message = "Authentication required"


class ConflictError(CoachError):
    status_code = 409
    default_message = "Resource already exists"


class ExternalServiceError(CoachError):
    """AI transform timeout, API error or unparseable response."""

    status_code = 500
    default_message = "External service failed. Please try again."
