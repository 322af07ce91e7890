"""Custom exceptions for todo-core.

Every exception carries a human-readable ``message`` and an optional
``details`` dict. The Flask error handlers in ``main`` map each class to
an HTTP status and a JSON error body.
"""


class TodoCoreError(Exception):
    """Base exception for all todo-core errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(TodoCoreError):
    """Request data is missing or invalid (400)."""


class ConflictError(TodoCoreError):
    """Resource already exists, e.g. duplicate email at registration (400)."""


class AuthenticationError(TodoCoreError):
    """Credentials are missing or wrong (401)."""


class InvalidCredentialError(AuthenticationError):
    """A bearer token was presented but failed verification (403)."""


class ResourceNotFound(TodoCoreError):
    """Resource does not exist or is not owned by the caller (404)."""


class DatabaseError(TodoCoreError):
    """Underlying persistence failure (500)."""
