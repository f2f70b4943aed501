"""ASGI entry point for launching the FastAPI application."""

from __future__ import annotations

import os

import uvicorn

from .config import Settings
from .logging_config import setup_logging


def main() -> None:
    """Run the API using uvicorn."""

    settings = Settings.from_env()
    setup_logging(settings.log_level)
    host = os.environ.get("HOST", "127.0.0.1")
    port = int(os.environ.get("PORT", "8000"))
    reload = os.environ.get("UVICORN_RELOAD", "0") == "1"
    uvicorn.run("rectmeasure.api:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
