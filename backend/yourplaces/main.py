"""YourPlaces API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map YourPlacesError → classified JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and geocoder initialized on startup, geocoder closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers (api/error_handlers.py): domain, validation, catch-all
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from yourplaces.api.error_handlers import register_error_handlers
from yourplaces.api.routes import health, places, users
from yourplaces.config import get_settings
from yourplaces.infrastructure.database import init_db
from yourplaces.infrastructure.geocoding import close_geocoder, init_geocoder
from yourplaces.infrastructure.observability import setup_logging

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
    init_geocoder(
        settings.google_api_key,
        url=settings.geocoding_url,
        timeout_seconds=settings.geocoding_timeout_seconds,
        max_retries=settings.geocoding_max_retries,
        base_delay_ms=settings.geocoding_base_delay_ms,
    )
    logger.info("YourPlaces API started")
    yield
    await close_geocoder()
    await manager.dispose()
    logger.info("YourPlaces API shutting down")


app = FastAPI(
    title="YourPlaces API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(places.router)

register_error_handlers(app)
