"""Persona Registry API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PersonaRegistryError → plain-text message bodies
    - A client disconnect cancels the in-flight handler; no response is written
    - CORS configured from settings (not hardcoded)
    - Database engine built on startup via lifespan and disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Tables created on startup when configured: no migration tool for a single table
    - Startup pings the database and logs the outcome; readiness probe repeats the check
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from persona_registry.api.error_handlers import register_error_handlers
from persona_registry.api.middleware import CancelOnDisconnectMiddleware
from persona_registry.infrastructure.database import init_db
from persona_registry.infrastructure.observability import setup_logging
from persona_registry.config import get_settings
from persona_registry.api.routes import health, personas

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.create_tables_on_startup:
        await manager.create_all()
    if await manager.health_check():
        logger.info("Database connection established")
    else:
        logger.error("Database unreachable at startup")
    logger.info("Persona Registry API started")
    yield
    logger.info("Persona Registry API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Persona Registry API", version="1.0.0", lifespan=lifespan,
)

# CORS origins come from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CancelOnDisconnectMiddleware)

app.include_router(health.router)
app.include_router(personas.router)

register_error_handlers(app)
