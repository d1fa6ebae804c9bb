"""Error types for authentication, authorization and resource services."""


class AuthError(Exception):
    """Base for token and role-gate failures; carries the HTTP status and a machine-readable code."""

    status_code: int = 401
    code: str = "auth_error"
    default_message: str = "Not authenticated"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NoTokenError(AuthError):
    code = "no_token"
    default_message = "No token, authorization denied"


class InvalidTokenError(AuthError):
    code = "invalid_token"
    default_message = "Token is not valid"


class ExpiredTokenError(AuthError):
    code = "expired_token"
    default_message = "Token has expired"


class ForbiddenError(AuthError):
    status_code = 403
    code = "forbidden"
    default_message = "Forbidden"


class ServiceError(Exception):
    """Raised by app.services when a request cannot be fulfilled."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ConflictError(ServiceError):
    """A unique value (username, email, slug, template name) is already in use."""


class NotFoundError(ServiceError):
    """Referenced record does not exist or is soft-deleted."""


class PermissionDeniedError(ServiceError):
    """Caller is authenticated but does not own the record."""
