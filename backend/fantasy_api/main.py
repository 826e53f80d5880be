"""NFL Fantasy API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FantasyError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py: domain, validation, catch-all
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fantasy_api.api.error_handlers import register_error_handlers
from fantasy_api.api.routes import (
    audit, auth, health, leagues, nfl_players, nfl_teams, reference, scoring,
    seasons, system_roles, teams, users,
)
from fantasy_api.config import get_settings
from fantasy_api.infrastructure import database
from fantasy_api.infrastructure.observability import setup_logging

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
    logger.info("NFL Fantasy API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("NFL Fantasy API shutting down")


app = FastAPI(title="NFL Fantasy API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(system_roles.router)
app.include_router(seasons.router)
app.include_router(reference.router)
app.include_router(scoring.router)
app.include_router(nfl_teams.router)
app.include_router(nfl_players.router)
app.include_router(leagues.router)
app.include_router(teams.router)
app.include_router(audit.router)

register_error_handlers(app)
