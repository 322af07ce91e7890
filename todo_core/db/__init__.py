"""Database module for todo-core.

This module provides the Core API for database operations.
Core encapsulates a single connection and provides access to the user
and todo operations.

ARCHITECTURE:
- Database is the store handle owned by the Flask app. It is opened in
  create_app() and closed on shutdown, and hands out Core objects.
- Core owns its connection (no Flask g.db dependency)
- atomic=True: every statement in the with-block commits or rolls back
  together, and the connection closes on exit
- atomic=False: autocommit, one statement at a time

OWNER SCOPING:
Every todo read and write filters by id AND user_id in a single
statement. There is no fetch-then-check step that could race, and a todo
owned by somebody else looks exactly like a missing one.
"""

import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from flask import current_app

from ..exceptions import DatabaseError

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"

# Key under which create_app() stores the Database on app.extensions
EXTENSION_KEY = "todo_core.database"

if TYPE_CHECKING:
    from .todo import TodoOperations
    from .user import UserOperations


class Core:
    """
    Database Core with user and todo operations.

    Maintains its own connection and transaction state.
    Provides access to operations through properties.

    Connection Lifecycle:
    - atomic=True: Connection closes on __exit__ from context manager
    - atomic=False: Connection runs in autocommit mode and closes when
      the Core is garbage collected
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
                    If False, Core has autocommit semantics.
        """
        self._conn = connection
        self._atomic = atomic
        self._user_ops = None
        self._todo_ops = None

    @property
    def user(self) -> "UserOperations":
        """User operations.

        Lazy-loaded to avoid circular import issues.
        """
        if self._user_ops is None:
            from .user import UserOperations
            self._user_ops = UserOperations(self._conn)
        return self._user_ops

    @property
    def todo(self) -> "TodoOperations":
        """Todo operations, always scoped to an owner.

        Lazy-loaded to avoid circular import issues.
        """
        if self._todo_ops is None:
            from .todo import TodoOperations
            self._todo_ops = TodoOperations(self._conn)
        return self._todo_ops

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            # Always close connection
            self._conn.close()

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def __del__(self):
        """Cleanup connection if not already closed.

        Called during garbage collection. Ignores errors since connection
        may already be closed or in an invalid state.
        """
        if hasattr(self, "_conn") and self._conn:
            try:
                self._conn.close()
            except sqlite3.Error:
                pass


class Database:
    """
    Store handle for a SQLite database file.

    One instance per application. Holds no connection itself; every
    Core it creates gets a fresh connection, so request handlers share
    nothing but the file and SQLite's own locking.
    """

    def __init__(self, path: str):
        self.path = path
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def connect(self, autocommit: bool = False) -> sqlite3.Connection:
        """Create a fresh database connection.

        Returns:
            SQLite connection with row_factory set to sqlite3.Row
            and foreign keys enabled.

        Raises:
            DatabaseError: If the database file cannot be opened
        """
        db_path = Path(self.path)
        db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            conn = sqlite3.connect(
                str(db_path),
                isolation_level=None if autocommit else "DEFERRED"
            )
            conn.row_factory = sqlite3.Row
            # Enable foreign key constraints (required for SQLite)
            conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as e:
            logger.error(f"Failed to open database {self.path}: {e}")
            raise DatabaseError("Failed to open database", {"path": self.path})
        return conn

    def core(self, atomic: bool = False) -> Core:
        """Create a Core bound to a new connection.

        Raises:
            DatabaseError: If the handle has been closed
        """
        if self._closed:
            raise DatabaseError("Database is closed", {"path": self.path})
        return Core(self.connect(autocommit=not atomic), atomic=atomic)

    def open(self) -> None:
        """Open the store: check connectivity and apply the schema."""
        self.init_schema()
        self._closed = False
        logger.info(f"Database opened at {self.path}")

    def close(self) -> None:
        """Close the store. Further core() calls fail."""
        self._closed = True
        logger.info(f"Database closed at {self.path}")

    def init_schema(self) -> None:
        """Apply schema.sql. Safe to run on an initialized database."""
        schema_sql = SCHEMA_PATH.read_text()
        conn = self.connect()
        try:
            conn.executescript(schema_sql)
            conn.commit()
        finally:
            conn.close()

    def reset_schema(self, environment: str) -> None:
        """Drop all tables and recreate them from schema.sql.

        Development convenience only.

        Raises:
            DatabaseError: If environment is production
        """
        if environment.lower() == "production":
            raise DatabaseError(
                "Refusing to reset the database in production",
                {"environment": environment}
            )

        conn = self.connect()
        try:
            conn.executescript(
                """
                DROP TABLE IF EXISTS todos;
                DROP TABLE IF EXISTS users;
                DROP TABLE IF EXISTS _schema_metadata;
                """
            )
            conn.commit()
        finally:
            conn.close()

        logger.warning(f"Database reset at {self.path}")
        self.init_schema()

    def get_schema_version(self) -> str:
        """Get current schema version from _schema_metadata table."""
        conn = self.connect()
        try:
            row = conn.execute(
                "SELECT value FROM _schema_metadata WHERE key = 'version'"
            ).fetchone()
        finally:
            conn.close()
        return row[0] if row else "unknown"


def get_database() -> Database:
    """Get the Database handle of the current Flask app."""
    return current_app.extensions[EXTENSION_KEY]


def get_core(atomic: bool = False) -> Core:
    """
    Get a database Core instance for the current app.

    Args:
        atomic: If True, returns a Core that MUST be used as context manager.
                Use for writes, so they commit together on exit.
                If False (default), returns a Core with autocommit semantics.

    Examples:
        Autocommit mode (reads):
        >>> core = get_core()
        >>> rows = core.todo.list(owner_id)

        Atomic mode (writes):
        >>> with get_core(atomic=True) as core:
        ...     row = core.todo.update(todo_id, owner_id, {"completed": True})
    """
    return get_database().core(atomic=atomic)
