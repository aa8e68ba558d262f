"""
Nusantara Bercerita story service: application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from api.error_handlers import register_error_handlers
from api.middleware import register_middleware
from api.routes import router as api_router
from auth.routes import router as auth_router
from config.settings import Settings, config
from core.service_factory import build_services

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("httpcore", "httpx", "multipart"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or config

    app = FastAPI(
        title="Nusantara Bercerita API",
        version="1.0.0",
        description="Accounts, profiles and favorite stories.",
    )
    app.state.services = build_services(settings)

    register_middleware(app, settings)
    register_error_handlers(app)

    # Routes
    app.include_router(auth_router)
    app.include_router(api_router, prefix="/api")

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def index() -> str:
        return "<h1>Nusantara Bercerita backend is running!</h1>"

    logger.info(
        "Application ready (users=%s, stories=%s)",
        settings.users_db_path, settings.stories_db_path,
    )
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
