"""Password hashing and user account logic.

Passwords are hashed with bcrypt. The salt is embedded in the hash
string, so verification only needs the plaintext and the stored hash.
"""

import logging

import bcrypt

from ..config import settings
from ..db import Core
from ..exceptions import AuthenticationError
from .schemas import UserCredentials, UserResponse

logger = logging.getLogger(__name__)


# ============================================================================
# Password Hashing
# ============================================================================

# bcrypt only uses the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    """Encode a password for bcrypt, truncated to 72 bytes."""
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt.

    The same password hashes differently on every call.
    """
    salt = bcrypt.gensalt(rounds=settings.bcrypt_work_factor)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash.

    Returns False for a wrong password and for a malformed hash.
    """
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Password verification against malformed hash")
        return False


# ============================================================================
# Accounts
# ============================================================================


def _row_to_user(row) -> UserResponse:
    return UserResponse(id=row["id"], email=row["email"], created_at=row["created_at"])


def create_user(core: Core, data: UserCredentials) -> UserResponse:
    """Create a user with a hashed password.

    Raises:
        ConflictError: If the email is already registered
    """
    user_id = core.user.create(data.email, hash_password(data.password))
    return _row_to_user(core.user.get_by_id(user_id))


def authenticate(core: Core, email: str, password: str) -> UserResponse:
    """Look up a user by email and check the password.

    Unknown email and wrong password raise different messages.

    Raises:
        AuthenticationError: If the user does not exist or the password is wrong
    """
    row = core.user.get_by_email(email)
    if row is None:
        logger.warning("Failed login attempt for unknown email")
        raise AuthenticationError("User not found", {"code": "user_not_found"})

    if not verify_password(password, row["password_hash"]):
        logger.warning(f"Failed login attempt for user {row['id']}")
        raise AuthenticationError("Invalid password", {"code": "invalid_password"})

    return _row_to_user(row)
