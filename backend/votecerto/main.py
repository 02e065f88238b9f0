"""VoteCerto API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map VoteCertoError → {"error": message} (api/error_handlers.py)
    - CORS configured from settings (not hardcoded); credentials allowed for the auth cookie
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema managed by Alembic, never create_all at startup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import votecerto.infrastructure.database as database
from votecerto.api.error_handlers import register_error_handlers
from votecerto.api.routes import (
    auth, communities, dashboard, health, projects, reports, sessions, users, votes,
)
from votecerto.config import get_settings
from votecerto.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("VoteCerto API started")
    yield
    if database.db_manager is not None:
        await database.db_manager.dispose()
    logger.info("VoteCerto API shutting down")


app = FastAPI(title="VoteCerto API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(communities.router)
app.include_router(sessions.router)
app.include_router(projects.router)
app.include_router(votes.router)
app.include_router(users.router)
app.include_router(reports.router)
app.include_router(dashboard.router)

register_error_handlers(app)
