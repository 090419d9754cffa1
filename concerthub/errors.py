"""Error kinds raised by the services and rendered at the HTTP boundary.

Every kind maps to one HTTP status and renders as ``{"error": message}``.
"""


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(ServiceError):
    """No bearer token on a protected route."""
    status_code = 401
    default_message = "Access denied"


class Forbidden(ServiceError):
    """Bearer token present but invalid or expired."""
    status_code = 403
    default_message = "Invalid token"


class Unauthorized(ServiceError):
    """Login with an unknown username or a wrong password."""
    status_code = 401
    default_message = "Invalid credentials"


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found"


class ConcertNotFound(NotFound):
    """No concert with that id, including ids that cannot be one."""
    default_message = "Concert not found"


class InvalidInput(ServiceError):
    status_code = 400
    default_message = "Customer information is required"


class DependencyFailure(ServiceError):
    """The QR renderer failed."""
    status_code = 500
    default_message = "Failed to generate QR code"


class StorageFailure(ServiceError):
    status_code = 500
    default_message = "Database error"
