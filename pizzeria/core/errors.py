"""Service-layer exceptions mapped to HTTP responses by the application."""


class ServiceError(Exception):
    """Base class for errors that terminate a request with a status and message."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(ServiceError):
    """Required fields missing or otherwise unusable input."""

    status_code = 400


class UnauthenticatedError(ServiceError):
    """Missing, invalid or inactive bearer token."""

    status_code = 401

    def __init__(self, message: str = "unauthorized") -> None:
        super().__init__(message)


class ForbiddenError(ServiceError):
    """Authenticated, but the caller's roles or ownership do not allow the operation."""

    status_code = 403

    def __init__(self, message: str = "unauthorized") -> None:
        super().__init__(message)


class NotFoundError(ServiceError):
    """Unknown resource. Also used for every login failure."""

    status_code = 404


class FactoryError(ServiceError):
    """Raised when the pizza factory rejects or cannot fulfil an order."""

    status_code = 500

    def __init__(self, message: str, report_url: str | None = None) -> None:
        self.report_url = report_url
        super().__init__(message)


class InvalidTokenError(Exception):
    """Raised when a session token fails signature, structure or expiry checks."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
