"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.todo import Todo


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createTodo", description="Create new todo")
    async def create_todo(self, info: strawberry.Info, text: str) -> Todo | None:
        """Create a new todo; the store assigns its id."""
        from ..resolvers.todo import create_todo

        return await create_todo(info, text)

    @strawberry.mutation(
        name="updateTodo", description="Update existing todo, mark it done or not done"
    )
    async def update_todo(
        self, info: strawberry.Info, id: int, done: bool | None = None
    ) -> Todo | None:
        """Update an existing todo. Omitted fields are left unchanged."""
        from ..resolvers.todo import update_todo

        return await update_todo(info, id, done)
