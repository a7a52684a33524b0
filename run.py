"""Entry point for the Waste Collection API.

Serves the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Host, port, database location and log level are read from the
environment (``API_HOST``, ``API_PORT``, ``DATABASE_URL``,
``LOG_LEVEL``); see ``waste_collection_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from waste_collection_api.app.core.config import settings
from waste_collection_api.app.main import app


async def main() -> None:
    """Start the API server and run until it is stopped."""
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        # Keep the handlers installed by setup_logging.
        log_config=None,
        log_level="debug" if settings.debug else settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")
