"""Entry point for serving the Decisions API.

Host and port are read from environment variables ``API_HOST`` and
``API_PORT``; defaults are ``0.0.0.0`` and ``8000``.  Database and
logging options are described in ``decisions_api/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import os

from uvicorn import Config, Server

from decisions_api.app.main import app


async def main() -> None:
    """Run the API server until interrupted."""
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
