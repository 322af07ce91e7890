"""Authentication gate for protected endpoints.

- authenticate_request() - shared bearer token check
- @auth_required - decorator form for single views

Every todo route is wrapped with @auth_required.
"""

import logging
from functools import wraps

import jwt
from flask import g, request

from ..exceptions import AuthenticationError, InvalidCredentialError
from . import token

logger = logging.getLogger(__name__)


def _bearer_token() -> str | None:
    """Extract the token from 'Authorization: Bearer <token>', if any."""
    auth_header = request.headers.get("Authorization", "")
    parts = auth_header.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def authenticate_request():
    """
    Require a valid bearer token for the current request.

    Stores the authenticated identity in flask.g:
    - g.user_id: User ID (int)
    - g.email: User email

    Raises:
        AuthenticationError: If no token was sent (401)
        InvalidCredentialError: If the token fails verification (403)
    """
    token_str = _bearer_token()
    if token_str is None:
        logger.warning("Unauthenticated request to protected endpoint")
        raise AuthenticationError("Access denied", {"code": "missing_auth"})

    try:
        payload = token.validate_access_token(token_str)
    except jwt.ExpiredSignatureError:
        logger.warning("JWT token expired")
        raise InvalidCredentialError("Token has expired", {"code": "token_expired"})
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid JWT token: {e}")
        raise InvalidCredentialError("Invalid token", {"code": "invalid_token"})

    g.user_id = payload.user_id
    g.email = payload.email
    logger.debug(f"JWT authentication successful for user {g.user_id}")


def auth_required(f):
    """
    Decorator to require authentication for endpoint access.

    Example:
    ```python
    @auth_required
    def protected_endpoint():
        user_id = g.user_id
        ...
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        authenticate_request()
        return f(*args, **kwargs)

    return wrapper
