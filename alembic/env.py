"""Alembic environment: migrates the todos schema through the async driver."""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context  # type: ignore[reportMissingImports]
from todos.config import get_database_url, to_async_url
from todos.dbmodels import target_metadata

config = context.config

# `todos db ...` passes the URL in and has already configured structlog;
# plain `alembic ...` runs fall back to the ini's logging section.
database_url = config.attributes.get("database_url")
if database_url is None:
    database_url = get_database_url()
    if config.config_file_name is not None:
        fileConfig(config.config_file_name, disable_existing_loggers=False)


def configure_and_run(**options) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **options)
    with context.begin_transaction():
        context.run_migrations()


async def migrate_online() -> None:
    engine = create_async_engine(to_async_url(database_url), poolclass=pool.NullPool)
    async with engine.connect() as connection:
        await connection.run_sync(
            lambda sync_conn: configure_and_run(
                connection=sync_conn,
                render_as_batch=sync_conn.dialect.name == "sqlite",
            )
        )
    await engine.dispose()


if context.is_offline_mode():
    configure_and_run(url=database_url, literal_binds=True)
else:
    asyncio.run(migrate_online())
