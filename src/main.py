"""Entry point for the alive monitor — `alive-monitor` console script."""

from __future__ import annotations

import logging
import sys

import uvicorn
from rich.console import Console
from rich.panel import Panel

from src.api.server import create_app
from src.config import ConfigurationError, load_settings

console = Console()
logger = logging.getLogger(__name__)


def _mask(token: str) -> str:
    return "****" + token[-4:] if len(token) > 8 else "****"


def main() -> None:
    """Validate configuration, then serve /alive until shut down."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    console.print(
        Panel.fit(
            f"[bold]Alive Monitor[/bold]\n"
            f"Bind:        {settings.api_host}:{settings.port}\n"
            f"Endpoint:    {settings.monitor_zeabur_endpoint}\n"
            f"Service:     {settings.monitor_service_id}\n"
            f"Environment: {settings.monitor_environment_id}\n"
            f"Token:       {_mask(settings.monitor_zeabur_token)}",
            title="alive-monitor",
            border_style="green",
        )
    )

    def _stop_server(error: BaseException) -> None:
        logger.critical("Shutting down after fatal poller error: %s", error)
        server.should_exit = True

    app = create_app(settings, on_fatal=_stop_server)
    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=settings.api_host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    )
    server.run()

    if app.state.poller.fatal_error is not None:
        logger.error("Exiting after fatal poller error: %s", app.state.poller.fatal_error)
        sys.exit(1)


if __name__ == "__main__":
    main()
