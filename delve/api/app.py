"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from delve import __version__
from delve.api.dependencies import set_session_manager
from delve.api.engine_manager import SessionManager
from delve.api.routes import api_router
from delve.config import DungeonConfig
from delve.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: DungeonConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = DungeonConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = SessionManager(_config)
        set_session_manager(manager)
        manager.start()
        logger.info("API server started — level generated.")
        yield
        manager.stop()
        set_session_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Delve Dungeon Engine",
        description=(
            "Turn-based grid dungeon — single-session display API.\n\n"
            "## API Groups\n\n"
            "- **Frame** — Tile shades, visible entities, stat bar and messages\n"
            "- **Intent** — One player intent per request\n"
            "- **Control** — Regenerate the level\n"
            "- **Config** — Read-only dungeon configuration\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Frame", "description": "Everything a display needs to paint after a turn. Tiles are RLE encoded."},
            {"name": "Intent", "description": "Resolve one decoded player intent and the AI round that follows."},
            {"name": "Control", "description": "Level lifecycle: reset regenerates from the configured seed."},
            {"name": "Config", "description": "Read-only dungeon configuration (map size, room bounds, FOV settings, player stats)."},
        ],
    )

    # CORS — allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
