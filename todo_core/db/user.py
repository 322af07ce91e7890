"""User operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- NO direct import needed when using Core API

Users are created by registration only. There is no update or delete.
"""

import sqlite3

from ..exceptions import ConflictError
from ..utils import isodatetime


class UserOperations:
    """User record operations."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def create(self, email: str, password_hash: str) -> int:
        """Insert a user record.

        Uniqueness is enforced by the UNIQUE constraint on users.email, so
        two concurrent registrations of the same email cannot both succeed.

        Args:
            email: Email address, stored exactly as given
            password_hash: Bcrypt hash of the password

        Returns:
            The auto-generated user ID

        Raises:
            ConflictError: If a user with this email already exists
        """
        try:
            cursor = self._conn.execute(
                """INSERT INTO users (email, password_hash, created_at)
                   VALUES (?, ?, ?)""",
                (email, password_hash, isodatetime.now())
            )
        except sqlite3.IntegrityError:
            raise ConflictError("User already exists", {"email": email})

        return cursor.lastrowid

    def get_by_email(self, email: str) -> sqlite3.Row | None:
        """Get user by exact email match, or None."""
        return self._conn.execute(
            "SELECT * FROM users WHERE email = ?",
            (email,)
        ).fetchone()

    def get_by_id(self, user_id: int) -> sqlite3.Row | None:
        """Get user by ID, or None."""
        return self._conn.execute(
            "SELECT * FROM users WHERE id = ?",
            (user_id,)
        ).fetchone()
