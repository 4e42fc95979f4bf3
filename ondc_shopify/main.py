"""
ONDC Shopify BPP - FastAPI application.

Reads configuration once, owns the shared httpx client and the background
job pool for the lifetime of the app.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from ondc_shopify import __version__
from ondc_shopify.api.routes import router as ops_router
from ondc_shopify.core.config import Settings, get_settings
from ondc_shopify.ondc.router import router as ondc_router
from ondc_shopify.workers import TaskPool

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Shopify URL: %s", settings.shopify_url)
        logger.info("Access Token configured: %s", bool(settings.shopify_access_token))
        logger.debug("Settings: %s", settings.redacted())

        app.state.pool = TaskPool(
            max_concurrency=settings.worker_concurrency,
            max_pending=settings.worker_max_pending,
            job_timeout=settings.job_timeout,
        )
        async with httpx.AsyncClient(transport=transport) as client:
            app.state.http = client
            yield
            await app.state.pool.shutdown(timeout=settings.job_timeout)
        logger.info("ONDC Shopify BPP stopped")

    app = FastAPI(title="ONDC Shopify BPP", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.include_router(ops_router)
    app.include_router(ondc_router)
    return app
