"""
Application exception hierarchy.

Services and dependencies raise these; the handlers registered in
``app.main`` turn them into JSON responses of the form ``{"message": ...}``
with the status code carried by the class.

    AppError (500)
    ├── ValidationError        → 400
    ├── AuthenticationError    → 401
    │   └── InvalidTokenError  → 401
    ├── AuthorizationError     → 403
    └── NotFoundError          → 404
"""

from typing import Any, Dict, Optional

from fastapi import status


class AppError(Exception):
    """
    Base class for all application errors.

    Attributes:
        message:  User-facing description, returned in the response body.
        context:  Extra debug info, logged but never returned to the client.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str = "An unexpected error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AppError):
    """Client input broke a business rule (self-follow, blank reply, duplicate signup)."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(AppError):
    """No usable session: cookie missing, or bad credentials at login."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(
        self,
        message: str = "User not authenticated! Please log in",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidTokenError(AuthenticationError):
    """Session token failed verification (signature, expiry, shape or claims)."""

    def __init__(
        self,
        message: str = "Invalid token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthorizationError(AppError):
    """Authenticated, but acting on a resource owned by another user."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(
        self,
        message: str = "Not enough permissions",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(AppError):
    """
    A requested record does not exist.

    The session gate also raises this when a valid token names a user that
    has since been deleted, so clients can tell it apart from a bad token.
    """

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
