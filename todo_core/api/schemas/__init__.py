"""Pydantic schemas for API validation.

Auth schemas are re-exported from the auth module for convenience.
"""

from todo_core.auth.schemas import (
    TokenPayload,
    TokenResponse,
    UserCredentials,
    UserResponse,
)

from .todo import TodoCreate, TodoResponse, TodoUpdate

__all__ = [
    "TodoCreate",
    "TodoUpdate",
    "TodoResponse",
    # Auth schemas (re-exported from todo_core.auth.schemas)
    "UserCredentials",
    "UserResponse",
    "TokenPayload",
    "TokenResponse",
]
