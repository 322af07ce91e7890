"""Todo operations.

IMPORT CONVENTION:
- Core accesses these through core.todo property

Every method takes the owner's user ID and filters on it in the same
statement that reads or writes the row. A todo that belongs to another
user raises the same ResourceNotFound as one that does not exist.
"""

import sqlite3
from datetime import datetime
from typing import Any

from . import query
from ..exceptions import ResourceNotFound
from ..utils import isodatetime

NOT_FOUND_MESSAGE = "Todo not found or unauthorized"

# Columns a caller may change through update()
UPDATABLE_FIELDS = {"description", "completed", "deadline"}


def _owner_scope(todo_id: int, owner_id: int) -> tuple[str, list[Any]]:
    return query.build_where_clause({"id": todo_id, "user_id": owner_id})


def _returned_row(cursor: sqlite3.Cursor) -> sqlite3.Row | None:
    # Drain the RETURNING statement so it is finished before commit
    rows = cursor.fetchall()
    return rows[0] if rows else None


class TodoOperations:
    """Owner-scoped todo operations."""

    def __init__(self, conn: sqlite3.Connection):
        """Initialize todo operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def create(
        self,
        owner_id: int,
        description: str,
        deadline: datetime | None = None
    ) -> sqlite3.Row:
        """Create a todo for an owner.

        Args:
            owner_id: ID of the owning user
            description: Non-empty description
            deadline: Optional deadline

        Returns:
            The inserted row
        """
        deadline_str = isodatetime.to_timestamp(deadline) if deadline else None

        return _returned_row(self._conn.execute(
            """INSERT INTO todos (user_id, description, completed, deadline, created_at)
               VALUES (?, ?, 0, ?, ?)
               RETURNING *""",
            (owner_id, description, deadline_str, isodatetime.now())
        ))

    def list(self, owner_id: int) -> list[sqlite3.Row]:
        """List all todos of an owner, ordered by ID."""
        return self._conn.execute(
            "SELECT * FROM todos WHERE user_id = ? ORDER BY id",
            (owner_id,)
        ).fetchall()

    def get(self, todo_id: int, owner_id: int) -> sqlite3.Row:
        """Get one todo of an owner.

        Raises:
            ResourceNotFound: If no todo matches both ID and owner
        """
        where_clause, params = _owner_scope(todo_id, owner_id)
        row = self._conn.execute(
            f"SELECT * FROM todos WHERE {where_clause}",
            params
        ).fetchone()

        if row is None:
            raise ResourceNotFound(NOT_FOUND_MESSAGE, {"todo_id": todo_id})

        return row

    def update(self, todo_id: int, owner_id: int, data: dict[str, Any]) -> sqlite3.Row:
        """Update supplied fields of an owner's todo.

        Args:
            todo_id: ID of the todo
            owner_id: ID of the requesting user
            data: Fields to change. Keys outside description, completed
                and deadline are ignored. A None deadline clears it.

        Returns:
            The full updated row

        Raises:
            ResourceNotFound: If no todo matches both ID and owner
        """
        data = {k: v for k, v in data.items() if k in UPDATABLE_FIELDS}

        if "deadline" in data and data["deadline"] is not None:
            data["deadline"] = isodatetime.to_timestamp(data["deadline"])
        if data.get("completed") is not None:
            data["completed"] = int(bool(data["completed"]))

        update_clause, params = query.build_update_clause(data, nullable={"deadline"})
        if not update_clause:
            return self.get(todo_id, owner_id)

        where_clause, where_params = _owner_scope(todo_id, owner_id)
        row = _returned_row(self._conn.execute(
            f"UPDATE todos SET {update_clause} WHERE {where_clause} RETURNING *",
            params + where_params
        ))

        if row is None:
            raise ResourceNotFound(NOT_FOUND_MESSAGE, {"todo_id": todo_id})

        return row

    def delete(self, todo_id: int, owner_id: int) -> None:
        """Delete an owner's todo.

        Raises:
            ResourceNotFound: If no todo matches both ID and owner
        """
        where_clause, params = _owner_scope(todo_id, owner_id)
        cursor = self._conn.execute(
            f"DELETE FROM todos WHERE {where_clause}",
            params
        )

        if cursor.rowcount == 0:
            raise ResourceNotFound(NOT_FOUND_MESSAGE, {"todo_id": todo_id})
