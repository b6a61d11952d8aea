"""
FastAPI application entry point for the storefront service.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.config import get_settings
from storefront.dependencies import get_db_client, get_event_bus
from storefront.events import (
    AUTH_STATE_CHANGED,
    CART_UPDATED,
    WATCHLIST_UPDATED,
    Event,
)
from storefront.routes import functions_router, router
from storefront.seed import load_demo_catalog

logger = logging.getLogger(__name__)

CORS_ALLOW_HEADERS = [
    "Authorization",
    "X-Client-Info",
    "Apikey",
    "Content-Type",
    "X-Client-Id",
]


def _log_event(event: Event) -> None:
    logger.debug("%s (client=%s)", event.type, event.target)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="Sibn Storefront API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=CORS_ALLOW_HEADERS,
    )

    events = get_event_bus()
    for event_type in (CART_UPDATED, WATCHLIST_UPDATED, AUTH_STATE_CHANGED):
        events.add_event_listener(event_type, _log_event)

    if settings.seed_demo_data:
        load_demo_catalog(get_db_client())

    app.include_router(router, prefix=settings.api_prefix)
    app.include_router(functions_router)
    return app


app = create_app()
