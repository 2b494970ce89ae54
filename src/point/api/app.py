"""FastAPI app entrypoint."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from point.api.routes.tenders import history_router
from point.api.routes.tenders import router as tenders_router
from point.config import configure_logging, get_settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="OCDS Point API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        max_age=3600,
    )
    app.include_router(tenders_router)
    app.include_router(history_router)

    @app.get("/api/v1/health", tags=["system"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("serving OCDS feed from %s", settings.db_path)
    uvicorn.run("point.api.app:app", host="0.0.0.0", port=8000, reload=False)
