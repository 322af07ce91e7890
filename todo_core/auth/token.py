"""JWT token service.

Tokens are stateless: the signed claims are the whole credential and no
session is stored server-side. Claims:

- sub: user ID (string, as required by RFC 7519)
- email: user email
- iat: issued-at, seconds since epoch
- exp: expiry, only present when settings.jwt_expiry_days is set
"""

from datetime import timedelta

import jwt
from pydantic import ValidationError

from ..config import settings
from ..utils import isodatetime
from .schemas import TokenPayload, UserResponse


def generate_access_token(user: UserResponse) -> str:
    """Sign an access token for a user."""
    now = isodatetime.now_unix()
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "iat": now,
    }
    if settings.jwt_expiry_days is not None:
        payload["exp"] = now + int(timedelta(days=settings.jwt_expiry_days).total_seconds())

    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def validate_access_token(token: str) -> TokenPayload:
    """Verify a token and return its claims.

    Raises:
        jwt.ExpiredSignatureError: If the token carries an exp in the past
        jwt.InvalidTokenError: If the token is malformed, has a bad signature
            or lacks required claims
    """
    payload = jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "email", "iat"]},
    )

    try:
        return TokenPayload(**payload)
    except ValidationError as e:
        raise jwt.InvalidTokenError(f"Invalid token claims: {e.error_count()} error(s)")
