from __future__ import annotations

from typing import TYPE_CHECKING, Any

import strawberry

from ...dbmodels import Todos
from ...errors import NotFoundError
from ...logging import get_logger

if TYPE_CHECKING:
    from ...store import TodoStore
    from ..types.todo import Todo

logger = get_logger(__name__)


def get_store(info: strawberry.Info) -> TodoStore:
    """Get the application's todo store from the GraphQL context."""
    return info.context["store"]


def to_graphql(todo: Todos) -> Todo:
    """Convert a SQLAlchemy row to the GraphQL type, field for field."""
    from ..types.todo import Todo as TodoType

    return TodoType(id=todo.id, text=todo.text, done=todo.done)


def empty_todo() -> Todo:
    """The value returned for ``todo`` when no id is given.

    Store ids start at 1, so id 0 never names a stored todo.
    """
    from ..types.todo import Todo as TodoType

    return TodoType(id=0, text="", done=False)


# Query resolvers
async def resolve_todo_by_id(info: strawberry.Info, id: int | None) -> Todo:
    """
    Resolve a todo by its ID.

    A missing ID returns the empty todo; an unknown ID raises NotFoundError,
    which GraphQL reports in the response's ``errors`` list.
    """
    if id is None:
        return empty_todo()

    try:
        todo = await get_store(info).get_by_id(id)
    except NotFoundError:
        logger.info("Todo not found", todo_id=id)
        raise

    return to_graphql(todo)


async def resolve_todo_list(info: strawberry.Info) -> list[Todo]:
    todos = await get_store(info).find_all()
    return [to_graphql(todo) for todo in todos]


# Mutation resolvers
async def create_todo(info: strawberry.Info, text: str) -> Todo:
    todo = await get_store(info).insert(text=text, done=False)
    return to_graphql(todo)


async def update_todo(info: strawberry.Info, id: int, done: bool | None = None) -> Todo:
    """
    Update an existing todo.

    Only arguments that were supplied are written. The stored row is read
    back after the write so the response reflects what was persisted.
    """
    values: dict[str, Any] = {}
    if done is not None:
        values["done"] = done

    store = get_store(info)
    if not values:
        # Nothing to write; still report a missing todo
        return to_graphql(await store.get_by_id(id))

    todo = await store.update_columns(id, values)
    return to_graphql(todo)
