"""
Main entrypoint for the Beacon API.

This module assembles the FastAPI application, sets up logging and
includes the versioned routers.  ``create_app`` builds the stores, key
generator and ``BeaconService`` from ``Settings`` and attaches them to
``app.state``; the default instance is created at import time as
``app`` so it can be served directly::

    uvicorn beacon_api.app.main:app --reload
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Callable, List, Optional

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .api.errors import register_error_handlers
from .api.v1.endpoints import track
from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import init_db, resolve_database_path, utc_now
from .core.logging_config import setup_logging
from .services.beacon_service import BeaconService
from .services.beacon_store import BeaconStore
from .services.key_generator import KeyGenerator
from .services.rendezvous_store import RendezvousStore


def build_service(config: Settings, clock: Callable[[], datetime] = utc_now) -> BeaconService:
    """Wire the stores and key generator described by ``config``.

    ``clock`` stamps ``creation_date`` on every stored record.
    """
    db_path = resolve_database_path(config.database_url)
    return BeaconService(
        beacons=BeaconStore(db_path, clock=clock, timeout=config.db_timeout),
        rendezvous=RendezvousStore(db_path, clock=clock, timeout=config.db_timeout),
        key_generator=KeyGenerator(bits=config.key_bits),
        max_attempts=config.key_max_attempts,
    )


def trusted_proxies(config: Settings) -> List[str]:
    return [host.strip() for host in config.forwarded_allow_ips.split(",") if host.strip()]


def create_app(
    config: Optional[Settings] = None,
    clock: Callable[[], datetime] = utc_now,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    config : Optional[Settings]
        Settings to use instead of the environment‑derived defaults.
        Tests pass their own to point the app at a temporary database.
    clock : Callable[[], datetime]
        Source of record timestamps, UTC now by default.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = config or default_settings
    # Initialise logging before anything else so that the wiring below
    # can log.
    setup_logging(config)

    service = build_service(config, clock)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Creates the database file if needed and applies migrations.
        init_db(service.beacons.db_path)
        yield

    app = FastAPI(
        title=config.project_name,
        version=config.api_version,
        debug=config.debug,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.beacon_service = service

    register_error_handlers(app)

    proxies = trusted_proxies(config)
    if proxies:
        # Rewrites request.client from X-Forwarded-For, but only for
        # connections arriving from one of these proxies.
        app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=proxies)

    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(track.router, tags=["rendezvous"])

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def index() -> str:
        return "homepage"

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
