"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware
(CORS, request logging), registers the exception handlers and includes all
API routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mongo_db_service.core.database import close_db, init_db
from mongo_db_service.core.logging_config import get_logger, setup_logging

from .api.v1 import health, users
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Ensures the collection indexes on startup and closes the MongoDB client
    on shutdown.
    """
    # Startup
    try:
        logger.info(f"Starting up {constant.PROJECT_NAME} (profile={settings.profile})...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info(f"Shutting down {constant.PROJECT_NAME}...")
    await close_db()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    mongo-db-service API

    Manages user documents stored in MongoDB: create, read, update and delete
    users, plus actuator-style health and info endpoints.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)

app.include_router(health.router, prefix=constant.ACTUATOR_PATH, tags=["actuator"])
app.include_router(users.router, prefix=constant.USERS_API)
