"""
Database connection management
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ..config import Settings, get_database_url, settings, to_async_url
from ..dbmodels import Base
from ..logging import get_logger

logger = get_logger(__name__)


class Database:
    """Owns the application's async engine and session factory.

    One instance is built at startup and shared by every request.
    """

    def __init__(self, database_url: str | None = None, app_settings: Settings | None = None):
        self.settings = app_settings or settings
        if database_url is None:
            database_url = app_settings.database_url if app_settings else get_database_url()
        self.database_url = database_url
        self.engine: AsyncEngine = create_database_engine(self.database_url, self.settings)
        self._session_local = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("Database initialized", database_url=_redact_url(self.database_url))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a database session, committing on success and rolling back on error."""
        async with self._session_local() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create missing tables from the ORM metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def check_connection(self) -> tuple[bool, str | None]:
        """
        Test the database connection.

        Returns:
            tuple: (success: bool, error_message: str | None)
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True, None
        except Exception as e:
            error_str = str(e)
            if "Connection refused" in error_str or "could not connect" in error_str:
                return False, f"Cannot connect to database server: {error_str}"
            if "unable to open database file" in error_str:
                return False, f"Cannot open SQLite database file: {error_str}"
            return False, f"Database connection error ({type(e).__name__}): {error_str}"

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connections closed")


def create_database_engine(database_url: str, app_settings: Settings | None = None) -> AsyncEngine:
    """Create an async engine for a sync or async SQLAlchemy URL."""
    app_settings = app_settings or settings
    async_url = to_async_url(database_url)

    if async_url.startswith("sqlite"):
        # SQLite picks its own pool class; sizing arguments are rejected there
        return create_async_engine(async_url, echo=app_settings.sql_echo)

    return create_async_engine(
        async_url,
        pool_size=app_settings.database_pool_size,
        max_overflow=app_settings.database_max_overflow,
        echo=app_settings.sql_echo,
    )


def _redact_url(database_url: str) -> str:
    """Hide the password portion of a database URL for logging."""
    scheme, sep, rest = database_url.partition("://")
    if not sep or "@" not in rest:
        return database_url
    credentials, _, host = rest.rpartition("@")
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:***@{host}"
