"""Optional liveness endpoint for hosts that health-check a listening port."""

from __future__ import annotations

import logging
import threading

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

log = logging.getLogger(__name__)


def create_app(message: str = "launcher is running") -> FastAPI:
    app = FastAPI(title="snaplaunch health", docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return message

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    return app


def start_health_server(port: int, message: str = "launcher is running", host: str = "0.0.0.0") -> threading.Thread:
    """Serve the liveness app from a daemon thread so it never blocks supervision."""
    config = uvicorn.Config(create_app(message), host=host, port=port, log_level="warning")
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, name="health-server", daemon=True)
    thread.start()
    log.info("Web server on port %d", port)
    return thread
