"""FastAPI application entry point with lifespan management."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from policy_management.api.clients import router as clients_router
from policy_management.api.customers import router as customers_router
from policy_management.api.errors import register_exception_handlers
from policy_management.api.health import router as health_router
from policy_management.api.middleware import RequestContextMiddleware
from policy_management.api.policies import router as policies_router
from policy_management.core.config import settings
from policy_management.core.database import (
    create_engine,
    create_schema,
    create_session_factory,
)
from policy_management.core.logging import configure_logging, get_logger
from policy_management.core.sentry import init_sentry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle resources.

    Startup:
        - Configure structured logging
        - Initialize Sentry error tracking
        - Create database engine and session factory
        - Create missing tables (development only unless configured)

    Shutdown:
        - Dispose database engine
    """
    configure_logging()
    logger.info("Starting application", environment=settings.environment)

    if init_sentry():
        logger.info("Sentry initialized")

    app.state.db_engine = create_engine()
    app.state.async_session = create_session_factory(app.state.db_engine)
    logger.info("Database engine created")

    if settings.should_create_schema:
        await create_schema(app.state.db_engine)
        logger.info("Database schema ensured")

    yield

    logger.info("Shutting down application")
    await app.state.db_engine.dispose()
    logger.info("Database engine disposed")


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware, routers and handlers."""
    application = FastAPI(
        title="Policy Management API",
        description="Clients and insurance policies: CRUD, filtering and cancellation",
        version="1.0.0",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestContextMiddleware)

    register_exception_handlers(application)

    application.include_router(health_router)
    application.include_router(clients_router)
    application.include_router(policies_router)
    application.include_router(customers_router)
    return application


app = create_app()
