"""
Store error taxonomy surfaced to GraphQL resolvers
"""


class TodoStoreError(Exception):
    """Base class for failures reported by the todo store."""


class NotFoundError(TodoStoreError):
    """No todo row matches the requested id."""

    def __init__(self, todo_id: int):
        self.todo_id = todo_id
        super().__init__(f"Todo {todo_id} not found")


class ConstraintViolationError(TodoStoreError):
    """A write violated a table constraint, e.g. a duplicate id."""


class ConflictError(TodoStoreError):
    """The row changed since it was read; the write was rejected."""

    def __init__(self, todo_id: int, expected_version: int | None = None):
        self.todo_id = todo_id
        self.expected_version = expected_version
        if expected_version is None:
            message = f"Todo {todo_id} was modified concurrently"
        else:
            message = f"Todo {todo_id} was modified concurrently (expected version {expected_version})"
        super().__init__(message)
