"""Entry point for the Beacon API server.

Launches the FastAPI application with Uvicorn.  Intended to be run
from the project root, for example under Docker, where you only
specify a single Python file to run.

Configuration (database path, payload file, log level, ...) is read
from environment variables; see ``beacon_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from beacon_api.app.core.config import settings
from beacon_api.app.core.logging_config import setup_logging
from beacon_api.app.main import app


async def run_api() -> None:
    """Serve the API using Uvicorn.

    Host and port are read from environment variables ``HOST`` and
    ``PORT``.  Defaults are ``0.0.0.0`` and ``8000``.
    """
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    # Forwarded headers are handled inside the app from FORWARDED_ALLOW_IPS.
    config = Config(app=app, host=host, port=port, reload=False, log_level="info", proxy_headers=False)
    # Config resets the uvicorn loggers; reapply ACCESS_LOG_LEVEL.
    setup_logging(settings)
    server = Server(config)
    await server.serve()


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    await run_api()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
