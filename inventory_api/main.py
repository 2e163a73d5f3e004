"""
Inventory API — application entry point.

This is the **only** file that assembles the app.  All business logic
lives in the `api/`, `db/`, and `core/` packages.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory_api.api.api import api_router
from inventory_api.core.config import Settings, settings as default_settings
from inventory_api.core.exceptions import register_exception_handlers
from inventory_api.core.security import TokenService
from inventory_api.db.session import build_store
from inventory_api.db.store import CredentialStore

logging.basicConfig(
    level=getattr(logging, default_settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    store: CredentialStore = app.state.store
    await store.create_schema()
    logger.info("Database tables initialised (%s)", store.backend)

    logger.info("%s v%s started", app.title, app.version)
    yield
    await store.close()
    logger.info("Shutdown complete")


# ── App factory ─────────────────────────────────────────────────────
def create_app(
    settings: Settings | None = None,
    store: CredentialStore | None = None,
) -> FastAPI:
    settings = settings or default_settings

    application = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.state.store = store or build_store(settings)
    application.state.token_service = TokenService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )

    # CORS
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)

    application.include_router(api_router, prefix=settings.API_PREFIX)

    return application


app = create_app()


def run() -> None:
    """Console entry point: serve ``app`` with uvicorn."""
    import uvicorn

    logger.info("Starting %s on port %s", default_settings.PROJECT_NAME, default_settings.PORT)
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
