# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Flower Shop API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:create_app --factory --reload
#   flower-shop            (console script, see run() below)
# =============================================================================

import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.auth import routes as auth_routes
from app.config import Settings, get_settings
from app.dependencies import build_context
from app.exceptions import (
    FlowerShopException,
    flowershop_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import flowers, health, orders
from core.services.session_store import SessionStore
from lib.datastore import Datastore, DatastoreError, DatastoreUnavailableError
from lib.readiness import wait_for_datastore
from lib.supabase_client import SupabaseDatastore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


async def session_pruner(
    sessions: SessionStore,
    interval: float,
    shutdown_event: asyncio.Event,
) -> None:
    """
    Background task that purges expired sessions.

    Runs every `interval` seconds until the shutdown event is set.
    A failed purge is logged and retried on the next tick.
    """
    logger.info(f"Starting session pruner (every {interval}s)")

    while not shutdown_event.is_set():
        try:
            await asyncio.wait_for(shutdown_event.wait(), timeout=interval)
            break
        except asyncio.TimeoutError:
            pass

        try:
            removed = await sessions.expire()
            if removed:
                logger.debug(f"Pruned {removed} expired sessions")
        except DatastoreError as e:
            logger.warning(f"Session prune failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Connect the datastore, wait until it answers, build the
      AppContext, start the session pruner
    - Shutdown: Stop the pruner

    Requests are not accepted until startup finishes. If the datastore never
    answers, startup fails and the server process exits.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting Flower Shop API in {settings.ENVIRONMENT} mode")

    datastore: Datastore | None = app.state.datastore
    if datastore is None:
        datastore = await SupabaseDatastore.connect(settings)

    try:
        await wait_for_datastore(
            datastore,
            retries=settings.DB_READY_RETRIES,
            delay=settings.DB_READY_DELAY_SECONDS,
        )
    except DatastoreUnavailableError:
        logger.critical("Datastore never became reachable, refusing to start")
        raise

    context = build_context(settings, datastore, sessions=app.state.session_store)
    app.state.context = context

    shutdown_event = asyncio.Event()
    pruner_task = None
    if settings.SESSION_PRUNE_INTERVAL_SECONDS > 0:
        pruner_task = asyncio.create_task(
            session_pruner(context.sessions, settings.SESSION_PRUNE_INTERVAL_SECONDS, shutdown_event)
        )

    yield

    logger.info("Shutting down Flower Shop API")

    shutdown_event.set()
    if pruner_task:
        pruner_task.cancel()
        try:
            await pruner_task
        except asyncio.CancelledError:
            pass


def create_app(
    settings: Settings | None = None,
    datastore: Datastore | None = None,
    session_store: SessionStore | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration; loaded from the environment if omitted
        datastore: Datastore to use; a SupabaseDatastore is connected at
            startup if omitted
        session_store: Session backend; chosen by SESSION_BACKEND if omitted

    Returns:
        FastAPI: The configured application
    """
    if settings is None:
        settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Flower Shop API",
        description="""
## Flower Shop Backend

Account signup/login with session cookies, a read-only flower catalog,
and order placement for logged-in users.

### Quick Start

```bash
# 1. Sign up (stores the session cookie)
curl -c jar -X POST http://localhost:8000/api/auth/signup \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Rose", "email": "rose@example.com", "password": "secret1"}'

# 2. Browse flowers
curl http://localhost:8000/api/flowers

# 3. Order
curl -b jar -X POST http://localhost:8000/api/orders \\
  -H "Content-Type: application/json" \\
  -d '{"flower_id": 1, "quantity": 12}'
```
""",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Auth",
                "description": "Signup, login, logout and the current user",
            },
            {
                "name": "Flowers",
                "description": "Read-only flower catalog",
            },
            {
                "name": "Orders",
                "description": "Place orders and view order history (login required)",
            },
            {
                "name": "Health",
                "description": "API health and liveness checks",
            },
        ],
    )

    app.state.settings = settings
    app.state.datastore = datastore
    app.state.session_store = session_store

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(FlowerShopException, flowershop_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(
        auth_routes.router,
        prefix="/api/auth",
        tags=["Auth"]
    )

    app.include_router(
        flowers.router,
        prefix="/api/flowers",
        tags=["Flowers"]
    )

    app.include_router(
        orders.router,
        prefix="/api/orders",
        tags=["Orders"]
    )

    app.include_router(
        health.router,
        prefix="/api",
        tags=["Health"]
    )

    return app


def run() -> None:
    """Start the API server with the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
    )


if __name__ == "__main__":
    run()
