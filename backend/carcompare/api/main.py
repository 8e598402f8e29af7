from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.carcompare.api.errors import setup_exception_handlers
from backend.carcompare.core.logging import RequestContextMiddleware, get_logger, setup_logging
from backend.carcompare.core.settings import Settings, settings as default_settings
from .routes import compare

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the compare API application."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        setup_logging(settings.log_level, settings.log_format)
        logger.info("Starting comparables API")
        yield
        logger.info("Shutting down comparables API")

    application = FastAPI(title="Vehicle Comparables API", version="0.1.0", lifespan=lifespan)

    application.add_middleware(RequestContextMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    setup_exception_handlers(application)

    application.include_router(compare.router, prefix="/api", tags=["compare"])
    return application


app = create_app()
