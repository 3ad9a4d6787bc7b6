"""Custom exception classes and error handling."""

from fastapi import HTTPException, status


class AppException(HTTPException):
    """Base application exception.

    ``code`` identifies the kind of failure; ``message`` is what the client
    sees in the ``{"error": ...}`` envelope.
    """

    def __init__(self, status_code: int, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(status_code=status_code, detail={"error": message})


class ValidationError(AppException):
    """Missing or malformed input."""

    def __init__(self, message: str = "Validation error"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code="VALIDATION_ERROR",
            message=message,
        )


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="AUTH_FAILED",
            message=message,
        )


class PermissionDeniedError(AppException):
    """Role does not allow the requested action."""

    def __init__(self, message: str = "Permission denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            code="PERMISSION_DENIED",
            message=message,
        )


class ForbiddenError(AppException):
    """Forbidden action - user is not allowed to touch this resource."""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            code="FORBIDDEN",
            message=message,
        )


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, resource: str = "Resource", message: str | None = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            code="NOT_FOUND",
            message=message or f"{resource} not found",
        )


class ConflictError(AppException):
    """Unique key already taken."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            code="CONFLICT",
            message=message,
        )
