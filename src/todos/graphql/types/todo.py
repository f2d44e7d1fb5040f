"""
Todo GraphQL type definitions
"""

import strawberry


@strawberry.type(description="A single todo item")
class Todo:
    """Todo type for GraphQL API. The row's version counter is not exposed."""

    id: int | None
    text: str | None
    done: bool | None
