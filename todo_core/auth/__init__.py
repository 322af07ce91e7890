"""Authentication module for todo-core.

This module provides authentication and authorization functionality:
- Password hashing and verification (service)
- JWT token generation and validation (token)
- Bearer token gate for protected endpoints (decorators)
- Registration and login endpoints (api)

Auth endpoints (under settings.api_prefix):
- POST /register - Create account, return JWT token
- POST /login - Authenticate, return JWT token
"""

from . import schemas, token

__all__ = ["schemas", "token"]
