#!/usr/bin/env python3
"""
Main CLI entry point for the Todos server.
"""

import asyncio
import sys
from collections.abc import Callable
from pathlib import Path

import click
import uvicorn
from alembic import command
from alembic.config import Config

from todos import __version__
from todos.config import get_database_url, settings
from todos.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="todos")
def cli() -> None:
    """Todos CLI - run the GraphQL server and manage its data."""
    pass


@cli.command()
@click.option("--host", default=settings.api_host, help="Host to bind to")
@click.option("--port", default=settings.api_port, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the Todos API server."""
    configure_logging(debug=(log_level == "debug"), log_level=log_level)

    logger.info("Starting Todos API server", host=host, port=port, reload=reload)

    try:
        uvicorn.run(
            "todos.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("init-db")
def init_db() -> None:
    """Create the todos table if it does not exist."""
    from todos.database import Database

    configure_logging()

    async def _run() -> None:
        database = Database()
        try:
            await database.create_all()
        finally:
            await database.dispose()

    asyncio.run(_run())
    click.echo("Database schema ready")


@cli.command()
@click.option("--create-schema/--no-create-schema", default=True, help="Create tables first")
def seed(create_schema: bool) -> None:
    """Insert the default todos (idempotent)."""
    from todos.database import Database
    from todos.database.seed_data import seed_initial_data
    from todos.store import TodoStore

    configure_logging()

    async def _run() -> int:
        database = Database()
        try:
            if create_schema:
                await database.create_all()
            return await seed_initial_data(TodoStore(database))
        finally:
            await database.dispose()

    try:
        created = asyncio.run(_run())
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        sys.exit(1)

    click.echo(f"Seeded {created} todo(s)")


def alembic_config(database_url: str | None = None) -> Config:
    """Alembic config for the project's ``alembic/`` scripts.

    The target database defaults to TODOS_DATABASE_URL / settings.
    """
    project_dir = Path(__file__).resolve().parents[2]
    config = Config(str(project_dir / "alembic.ini"))
    config.set_main_option("script_location", str(project_dir / "alembic"))
    config.attributes["database_url"] = database_url or get_database_url()
    return config


@cli.group()
@click.option("--database-url", default=None, help="Override TODOS_DATABASE_URL")
@click.pass_context
def db(ctx: click.Context, database_url: str | None) -> None:
    """Apply or inspect schema migrations."""
    configure_logging()
    ctx.obj = alembic_config(database_url)


@db.command()
@click.argument("revision", default="head")
@click.pass_obj
def upgrade(config: Config, revision: str) -> None:
    """Migrate the schema up to REVISION (default: head)."""
    _migrate(command.upgrade, config, revision)


@db.command()
@click.argument("revision", default="-1")
@click.pass_obj
def downgrade(config: Config, revision: str) -> None:
    """Migrate the schema down to REVISION (default: one step)."""
    _migrate(command.downgrade, config, revision)


@db.command()
@click.pass_obj
def current(config: Config) -> None:
    """Show the revision the database is at."""
    _migrate(command.current, config)


def _migrate(action: Callable[..., None], config: Config, *args: str) -> None:
    logger.info("Running migration command", command=action.__name__, args=list(args))
    try:
        action(config, *args)
    except Exception as e:
        logger.error("Migration command failed", command=action.__name__, error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    cli()
