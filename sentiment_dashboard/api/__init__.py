"""FastAPI application factory for the sentiment dashboard."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from sentiment_dashboard.api import admin, auth, health, sentiment
from sentiment_dashboard.api.errors import register_exception_handlers
from sentiment_dashboard.infra.db.session import init_db, init_default_admin
from sentiment_dashboard.services.config_store import ConfigStore
from sentiment_dashboard.settings import AppSettings

logger = logging.getLogger(__name__)


def create_app(settings: AppSettings | None = None) -> FastAPI:
    settings = settings or AppSettings()
    config_store = ConfigStore(config_path=settings.config_file)

    app = FastAPI(
        title="Sentiment Dashboard API",
        version="0.1.0",
        default_response_class=ORJSONResponse,
    )

    # ---------- state --------------------------------------------------------
    app.state.settings = settings
    app.state.config_store = config_store
    app.state.result_cache = None

    # ---------- CORS ---------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # ---------- routers ------------------------------------------------------
    app.include_router(health.router)
    app.include_router(sentiment.router)
    app.include_router(auth.router)
    app.include_router(admin.router)

    # ---------- lifecycle events ---------------------------------------------
    @app.on_event("startup")
    async def startup_event() -> None:
        cfg = config_store.load()
        init_db(cfg.database.url)
        password = init_default_admin(
            cfg.database.url,
            default_username=settings.default_admin_username,
            default_password=settings.default_admin_password,
        )
        if password is not None and settings.default_admin_password is None:
            logger.warning(
                "Created admin user %r with generated password: %s",
                settings.default_admin_username,
                password,
            )

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        cache = app.state.result_cache
        if cache is not None:
            cache.close()
            app.state.result_cache = None

    return app


app = create_app()
