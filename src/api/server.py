"""FastAPI server exposing the liveness probe."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.alive_routes import alive_router
from src.config import MonitorSettings
from src.monitor.client import StatusClient
from src.monitor.poller import StatusPoller
from src.monitor.state import StatusCell

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start the status poller on startup, stop it on shutdown."""
    poller: StatusPoller = app.state.poller
    await poller.start()
    logger.info(
        "Monitoring service %s in environment %s via %s",
        app.state.settings.monitor_service_id,
        app.state.settings.monitor_environment_id,
        app.state.settings.monitor_zeabur_endpoint,
    )

    yield

    # Shutdown
    await poller.stop()
    await app.state.status_client.aclose()


def create_app(
    settings: MonitorSettings,
    client: StatusClient | None = None,
    on_fatal: Callable[[BaseException], None] | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Alive Monitor",
        version="0.1.0",
        lifespan=lifespan,
    )

    if client is None:
        client = StatusClient(
            endpoint=settings.monitor_zeabur_endpoint,
            token=settings.monitor_zeabur_token,
            service_id=settings.monitor_service_id,
            environment_id=settings.monitor_environment_id,
            timeout=settings.monitor_request_timeout,
        )
    cell = StatusCell()

    app.state.settings = settings
    app.state.status_client = client
    app.state.status_cell = cell
    app.state.poller = StatusPoller(client=client, cell=cell, on_fatal=on_fatal)

    app.include_router(alive_router)

    return app
