"""
Root GraphQL query definitions
"""

import strawberry

from ..types.todo import Todo


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field(description="Get single todo")
    async def todo(self, info: strawberry.Info, id: int | None = None) -> Todo | None:
        """Get a todo by ID; an absent ID yields the empty todo."""
        from ..resolvers.todo import resolve_todo_by_id

        return await resolve_todo_by_id(info, id)

    @strawberry.field(name="todoList", description="List of todos")
    async def todo_list(self, info: strawberry.Info) -> list[Todo | None] | None:
        """Get every stored todo."""
        from ..resolvers.todo import resolve_todo_list

        return await resolve_todo_list(info)
