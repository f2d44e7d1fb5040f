"""
Main FastAPI application for the Todos service
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from .. import __version__
from ..config import Settings, settings
from ..database import Database
from ..database.seed_data import seed_initial_data
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..store import TodoStore

logger = get_logger(__name__)

EXAMPLE_REQUESTS = {
    "get_todo": "curl -g 'http://{host}:{port}/graphql?query={{todo(id:1){{id,text,done}}}}'",
    "list_todos": "curl -g 'http://{host}:{port}/graphql?query={{todoList{{id,text,done}}}}'",
    "create_todo": (
        "curl -X POST -H 'Content-Type: application/json' "
        '-d \'{{"query":"mutation {{createTodo(text:\\"My new todo\\"){{id,text,done}}}}"}}\' '
        "http://{host}:{port}/graphql"
    ),
    "update_todo": (
        "curl -X POST -H 'Content-Type: application/json' "
        '-d \'{{"query":"mutation {{updateTodo(id:1,done:true){{id,text,done}}}}"}}\' '
        "http://{host}:{port}/graphql"
    ),
}


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The database handle and todo store are built once here and shared by
    every request through ``app.state`` and the GraphQL context.
    """
    app_settings = app_settings or settings
    configure_logging(debug=app_settings.debug, log_level=app_settings.log_level)

    database = Database(app_settings=app_settings)
    store = TodoStore(database)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Todos API...")

        ok, error = await database.check_connection()
        if not ok:
            logger.error("Database connection check failed", error=error)

        if app_settings.auto_create_schema:
            await database.create_all()

        if app_settings.seed_on_startup:
            await seed_initial_data(store)

        logger.info(
            "Todos API ready",
            graphql_endpoint="/graphql",
            examples={
                name: example.format(host="localhost", port=app_settings.api_port)
                for name, example in EXAMPLE_REQUESTS.items()
            },
        )

        yield

        logger.info("Shutting down Todos API...")
        await database.dispose()

    app = FastAPI(
        title="Todos API",
        description="GraphQL CRUD service for todos",
        version=__version__,
        lifespan=lifespan,
        debug=app_settings.debug,
    )
    app.state.settings = app_settings
    app.state.database = database
    app.state.store = store

    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        ok, error = await database.check_connection()
        payload = {
            "status": "healthy" if ok else "degraded",
            "version": __version__,
            "database": "ok" if ok else error,
        }
        return payload

    @app.get("/", include_in_schema=False)
    async def explorer():  # pyright: ignore [reportUnusedFunction]
        """Send browsers to the GraphiQL explorer served by the GraphQL route."""
        return RedirectResponse(url="/graphql")

    try:
        from ..graphql.schema import create_graphql_router, validate_schema

        logger.info("Validating GraphQL schema...")
        validate_schema()

        app.include_router(create_graphql_router(store, graphiql=app_settings.graphiql))
        logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
    except Exception as e:  # pragma: no cover
        logger.error("Failed to initialize GraphQL endpoint", error=str(e))
        raise

    return app
