"""todo-core: multi-user todo list service with JWT authentication."""

__version__ = "0.1.0"
