"""
Database module for the Todos service
"""

from .connection import Database, create_database_engine

__all__ = ["Database", "create_database_engine"]
