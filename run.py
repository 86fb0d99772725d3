"""Entry point for the exchange service.

This script serves the FastAPI application with uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Host, port, storage directory and log level are read from environment
variables (see ``exchange_api/app/core/config.py``); ``HOST`` and
``PORT`` default to ``127.0.0.1`` and ``7669``.

Usage:
    python run.py
"""
import asyncio

from uvicorn import Config, Server

from exchange_api.app.core.config import settings
from exchange_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
