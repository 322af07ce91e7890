"""HTTP API for todo-core.

- todos: owner-scoped todo CRUD (bearer token required)
- validation: @validate_request decorator shared with the auth endpoints

Registration and login live in todo_core.auth.api.
"""

from .todos import todos_bp

__all__ = ["todos_bp"]
