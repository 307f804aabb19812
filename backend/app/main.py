from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from app.core.config import settings
from app.db.session import create_tables

# Routers
from app.routers import battles as battles_router
from app.routers import opponents as opponents_router
from app.routers import sessions as sessions_router

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure root logging from settings (only if nothing did it yet)."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    yield


def create_app() -> FastAPI:
    _configure_logging()
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Signed cookie holding the current user id
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE,
        https_only=(settings.ENV == "prod"),
    )

    # ----- API router -----
    api_prefix: str = getattr(settings, "API_PREFIX", "/api")
    api = APIRouter(prefix=api_prefix)
    api.include_router(sessions_router.router)
    api.include_router(opponents_router.router)
    api.include_router(battles_router.router)

    app.include_router(api)

    logger.info("%s configured (env=%s)", settings.APP_NAME, settings.ENV)
    return app


app = create_app()
