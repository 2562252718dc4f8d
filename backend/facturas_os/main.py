"""Consulta Facturas OS — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ConsultaError → structured JSON responses
    - Database pool created on startup and disposed on shutdown via lifespan
    - Static files mounted last so /consulta and /health take precedence

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py, registered here
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from facturas_os import __version__
from facturas_os.api.error_handlers import register_error_handlers
from facturas_os.api.routes import consulta, health
from facturas_os.config import get_settings
from facturas_os.infrastructure.database import init_db, close_db
from facturas_os.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.sqlalchemy_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"Consulta API started on port {settings.port}")
    yield
    await close_db()
    logger.info("Consulta API shutting down")


app = FastAPI(
    title="Consulta Facturas OS", version=__version__, lifespan=lifespan,
)
settings = get_settings()

register_error_handlers(app)

app.include_router(health.router)
app.include_router(consulta.router)

# html=True serves public/index.html at /
if os.path.isdir(settings.static_dir):
    app.mount(
        "/", StaticFiles(directory=settings.static_dir, html=True),
        name="static",
    )
else:
    logger.warning(
        f"Static directory {settings.static_dir!r} not found; static files disabled",
    )
