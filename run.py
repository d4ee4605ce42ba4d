"""Entry point for the clinic API server.

Runs the FastAPI application under Uvicorn.  Host and port come from the
``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0`` and
``3000``); ``JWT_SECRET`` must be set, see ``clinic_api.app.core.config``
for the other variables.

Usage:
    JWT_SECRET=... python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from clinic_api.app.core.config import settings


async def main() -> None:
    """Serve the API until interrupted."""
    # Import here so a missing JWT_SECRET surfaces as a startup error.
    from clinic_api.app.main import app

    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Starting server on %s:%s", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
