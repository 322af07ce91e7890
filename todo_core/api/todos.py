"""Todo CRUD endpoints for todo-core.

- GET    /api/todos       - List the caller's todos
- POST   /api/todos       - Create a todo
- PUT    /api/todos/{id}  - Update a todo
- DELETE /api/todos/{id}  - Delete a todo

Every route requires a bearer token and only ever touches todos owned by
the authenticated user. Updating or deleting somebody else's todo gives
the same 404 as a todo that does not exist.
"""

import logging

from flask import Blueprint, g, jsonify

from ..auth.decorators import auth_required
from ..db import get_core
from .schemas.todo import TodoCreate, TodoResponse, TodoUpdate
from .validation import validate_request

logger = logging.getLogger(__name__)


# Create Blueprint
todos_bp = Blueprint("todos", __name__)


def _row_to_todo_response(row) -> dict:
    return TodoResponse.from_row(row).model_dump(mode="json")


@todos_bp.get("")
@auth_required
def list_todos():
    """
    List all todos of the authenticated user, ordered by ID.

    Returns:
        200: Array of TodoResponse objects
    """
    core = get_core()
    try:
        rows = core.todo.list(g.user_id)
    finally:
        core.close()

    return jsonify([_row_to_todo_response(row) for row in rows])


@todos_bp.post("")
@auth_required
@validate_request
def create_todo(data: TodoCreate):
    """
    Create a todo owned by the authenticated user.

    Request Body (TodoCreate):
        - description: str (required, non-empty)
        - deadline: ISO 8601 datetime | None (default: None)

    Returns:
        200: TodoResponse with created todo
        400: Validation error
    """
    with get_core(atomic=True) as core:
        row = core.todo.create(g.user_id, data.description, data.deadline)

    logger.info(f"Created todo {row['id']} for user {g.user_id}")

    return jsonify(_row_to_todo_response(row))


@todos_bp.put("/<int:todo_id>")
@auth_required
@validate_request
def update_todo(todo_id: int, data: TodoUpdate):
    """
    Update a todo. Only fields present in the body are changed.

    Request Body (TodoUpdate):
        All fields optional:
        - description: str | None
        - completed: bool | None
        - deadline: ISO 8601 datetime | None (explicit null clears it)

    Returns:
        200: TodoResponse with updated todo
        404: Todo not found or unauthorized
        400: Validation error
    """
    with get_core(atomic=True) as core:
        row = core.todo.update(todo_id, g.user_id, data.model_dump(exclude_unset=True))

    return jsonify(_row_to_todo_response(row))


@todos_bp.delete("/<int:todo_id>")
@auth_required
def delete_todo(todo_id: int):
    """
    Delete a todo.

    Returns:
        200: {"message": "Todo deleted successfully"}
        404: Todo not found or unauthorized
    """
    with get_core(atomic=True) as core:
        core.todo.delete(todo_id, g.user_id)

    logger.info(f"Deleted todo {todo_id} for user {g.user_id}")

    return jsonify({"message": "Todo deleted successfully"})
