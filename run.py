"""Entry point for the Library API.

Launches the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration is read from environment variables.  ``DATABASE_URL``
(the SQLite store) and ``API_KEY`` (the phone/email validation
service) are required; the process exits if either is missing.
``HOST`` and ``PORT`` choose the listening address.

Usage:
    DATABASE_URL=library.db API_KEY=... python run.py
"""
import asyncio
import logging
import os
import sys

from uvicorn import Config, Server

from library_api.app.core.config import settings
from library_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted.

    Host and port are read from environment variables ``HOST`` and
    ``PORT``.  Defaults are ``0.0.0.0`` and ``3000``.
    """
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    missing = settings.missing()
    if missing:
        logging.getLogger(__name__).error("Missing required settings: %s", ", ".join(missing))
        sys.exit(1)
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
