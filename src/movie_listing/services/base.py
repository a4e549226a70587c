"""Service-layer exceptions."""


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(ServiceError):
    """Raised when a resource is not found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=404)


class StorageError(ServiceError):
    """Raised when a write to the database fails.

    The message is sent to clients as-is, so it must not carry driver details.
    """

    def __init__(self, message: str = "Storage operation failed") -> None:
        super().__init__(message, status_code=500)
