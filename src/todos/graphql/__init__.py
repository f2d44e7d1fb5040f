"""GraphQL API for the Todos service."""
