"""Entry point for the gym membership API.

Launches the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration such as the database path, log level and CORS origins is
read from environment variables (see ``gym_api/app/core/config.py``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from gym_api.app.core.config import settings
from gym_api.app.main import app


async def run_api() -> None:
    """Start the API using Uvicorn.

    Host and port are read from the ``API_HOST`` and ``API_PORT``
    environment variables.  Defaults are ``0.0.0.0`` and ``3000``.
    """
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("API stopped")
