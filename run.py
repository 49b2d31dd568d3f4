"""Entry point for the repertoire service.

Starts the FastAPI application with Uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``3000``); see ``repertorio_api.app.core.config`` for the other
settings.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from repertorio_api.app.core.config import settings
from repertorio_api.app.main import app

logger = logging.getLogger("repertorio_api")


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logger.info("Servidor listo en http://localhost:%s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
