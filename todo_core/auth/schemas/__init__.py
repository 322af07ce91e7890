"""Authentication Pydantic schemas for API validation."""

from .auth import (
    UserCredentials,
    UserResponse,
    TokenPayload,
    TokenResponse,
)

__all__ = [
    "UserCredentials",
    "UserResponse",
    "TokenPayload",
    "TokenResponse",
]
