# framekit/services/api/app.py
from __future__ import annotations

from fastapi import FastAPI

from framekit.common.settings import get_settings
from framekit.services.api.routers import health, media


def create_app() -> FastAPI:
    cfg = get_settings()
    app = FastAPI(
        title="framekit API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    # Routers
    app.include_router(health.router)
    app.include_router(media.router)
    return app
