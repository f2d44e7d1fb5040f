"""
Todos GraphQL service
CRUD over a single Todo entity, served through Strawberry and FastAPI
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
