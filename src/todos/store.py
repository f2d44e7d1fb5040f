"""Todo store: the persistence capability the GraphQL resolvers depend on."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from .database.connection import Database
from .dbmodels import Todos
from .errors import ConflictError, ConstraintViolationError, NotFoundError
from .logging import get_logger

logger = get_logger(__name__)

# Columns a partial update may touch; id and version are owned by the store
UPDATABLE_COLUMNS = frozenset({"text", "done"})


class TodoStore:
    """Async CRUD over the ``todos`` table.

    Every call runs in its own short-lived session taken from the shared
    :class:`Database`. Returned rows are detached and fully loaded.
    """

    def __init__(self, database: Database):
        self.database = database

    async def get_by_id(self, todo_id: int) -> Todos:
        async with self.database.session() as session:
            todo = await session.get(Todos, todo_id)
            if todo is None:
                raise NotFoundError(todo_id)
            return todo

    async def find_all(self) -> list[Todos]:
        async with self.database.session() as session:
            result = await session.execute(select(Todos).order_by(Todos.id))
            return list(result.scalars().all())

    async def count(self) -> int:
        async with self.database.session() as session:
            result = await session.execute(select(func.count()).select_from(Todos))
            return result.scalar_one()

    async def insert(self, text: str, done: bool = False, todo_id: int | None = None) -> Todos:
        """Persist a new todo. Leave ``todo_id`` unset to let the store assign one."""
        todo = Todos(text=text, done=done)
        if todo_id is not None:
            todo.id = todo_id

        try:
            async with self.database.session() as session:
                session.add(todo)
                await session.flush()
        except IntegrityError as e:
            logger.warning("Todo insert rejected", todo_id=todo_id, error=str(e.orig))
            raise ConstraintViolationError(f"Todo {todo_id} already exists") from e

        logger.info("Todo created", todo_id=todo.id)
        return todo

    async def update_columns(
        self,
        todo_id: int,
        values: Mapping[str, Any],
        *,
        expected_version: int | None = None,
    ) -> Todos:
        """
        Write only the given columns of one todo and return the stored row.

        Args:
            todo_id: Row to update
            values: Column name to new value; columns not present are left untouched
            expected_version: Version the caller read; a mismatch is a conflict

        Raises:
            NotFoundError: No row with ``todo_id``
            ConflictError: The row's version moved on since it was read
        """
        unknown = set(values) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update columns: {', '.join(sorted(unknown))}")

        try:
            async with self.database.session() as session:
                todo = await session.get(Todos, todo_id)
                if todo is None:
                    raise NotFoundError(todo_id)
                if expected_version is not None and todo.version != expected_version:
                    raise ConflictError(todo_id, expected_version)

                for column, value in values.items():
                    setattr(todo, column, value)
                await session.flush()
        except StaleDataError as e:
            logger.warning("Stale todo update rejected", todo_id=todo_id)
            raise ConflictError(todo_id, expected_version) from e

        logger.info("Todo updated", todo_id=todo_id, updated_fields=sorted(values))
        return await self.get_by_id(todo_id)

    async def sync_id_sequence(self) -> None:
        """Move the id sequence past explicitly inserted ids (PostgreSQL only)."""
        if self.database.engine.dialect.name != "postgresql":
            return
        async with self.database.session() as session:
            await session.execute(
                text(
                    "SELECT setval(pg_get_serial_sequence('todos', 'id'), "
                    "COALESCE(MAX(id), 1)) FROM todos"
                )
            )
