from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import chat, health, render
from .core.config import get_settings

settings = get_settings()

logger = logging.getLogger("message_renderer.backend")
logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s %(message)s")

app = FastAPI(title=settings.app_name)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(health.router, prefix="/api")
app.include_router(render.router, prefix="/api")
app.include_router(chat.router, prefix="/api")

logger.info("%s started (%s)", settings.app_name, settings.environment)


__all__ = ["app"]
