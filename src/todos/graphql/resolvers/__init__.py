"""Resolver package for the GraphQL schema.

Query and mutation fields import their resolvers lazily from sibling modules.
"""
