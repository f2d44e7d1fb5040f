"""
Reusable seed data functions for database initialization.

Seeding is idempotent: todos whose id already exists are left untouched, so
it is safe to run on every startup.
"""

from __future__ import annotations

from ..errors import NotFoundError
from ..logging import get_logger
from ..store import TodoStore

logger = get_logger(__name__)

DEFAULT_TODOS: tuple[tuple[int, str], ...] = (
    (1, "A todo not to forget"),
    (2, "This is the most important"),
    (3, "Please do this or else"),
)


async def ensure_todo(store: TodoStore, todo_id: int, text: str) -> bool:
    """
    Ensure a todo with the given id exists.

    Returns:
        True if the todo was created, False if it already existed
    """
    try:
        existing = await store.get_by_id(todo_id)
    except NotFoundError:
        await store.insert(text=text, todo_id=todo_id)
        return True

    logger.debug("Todo already exists", todo_id=existing.id, text=existing.text)
    return False


async def seed_initial_data(store: TodoStore) -> int:
    """
    Seed the default todos.

    Returns:
        Number of todos created by this call
    """
    logger.info("Starting database seeding")

    created = 0
    for todo_id, text in DEFAULT_TODOS:
        if await ensure_todo(store, todo_id, text):
            created += 1

    if created:
        await store.sync_id_sequence()

    logger.info("Database seeding completed", created=created, total=await store.count())
    return created
