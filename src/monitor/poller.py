"""Background poller — queries the status API once a minute and publishes.

- First poll runs immediately on start, then on a fixed one-minute cadence
- Transport / decode failures keep the last published status
- A request-construction failure is fatal and stops the loop
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Protocol

from src.monitor.client import StatusDecodeError, StatusRequestError, StatusTransportError
from src.monitor.models import RUNNING, PublishedStatus
from src.monitor.state import StatusCell

logger = logging.getLogger(__name__)

POLL_INTERVAL = 60.0  # seconds


class StatusSource(Protocol):
    async def fetch_status(self) -> str: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StatusPoller:
    """Polls the remote status API and writes results into a StatusCell."""

    def __init__(
        self,
        client: StatusSource,
        cell: StatusCell,
        interval: float = POLL_INTERVAL,
        clock: Callable[[], datetime] = _utcnow,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        on_fatal: Callable[[BaseException], None] | None = None,
    ) -> None:
        self.client = client
        self.cell = cell
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._on_fatal = on_fatal
        self._task: asyncio.Task[None] | None = None
        # Diagnostics
        self.consecutive_failures: int = 0
        self.last_error: str | None = None
        self.fatal_error: BaseException | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background polling loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._poll_loop(), name="status-poller")
        self._task.add_done_callback(self._log_exit)
        logger.info("Status poller started (interval=%ss)", self.interval)

    async def stop(self) -> None:
        """Cancel the loop, aborting any in-flight request."""
        task, self._task = self._task, None
        if task is None:
            return
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                current = asyncio.current_task()
                if current is not None and current.cancelling():
                    raise
        logger.info("Status poller stopped")

    @staticmethod
    def _log_exit(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Status poller died: %r", exc, exc_info=exc)

    async def _poll_loop(self) -> None:
        loop = asyncio.get_running_loop()
        while True:
            started = loop.time()
            try:
                await self.poll_once()
            except StatusRequestError as e:
                self.fatal_error = e
                logger.critical("Cannot build status request, poller stopping: %s", e)
                if self._on_fatal:
                    self._on_fatal(e)
                return
            elapsed = loop.time() - started
            await self._sleep(max(self.interval - elapsed, 0.0))

    async def poll_once(self) -> PublishedStatus | None:
        """Run a single query; publish on success, keep state on failure."""
        try:
            remote_status = await self.client.fetch_status()
        except (StatusTransportError, StatusDecodeError) as e:
            self.consecutive_failures += 1
            self.last_error = str(e)
            logger.error(
                "Status poll failed (%d consecutive): %s",
                self.consecutive_failures, e,
            )
            return None

        status = PublishedStatus(
            healthy=remote_status == RUNNING,
            observed_at=self._clock(),
            remote_status=remote_status,
        )
        self.cell.publish(status)
        self.consecutive_failures = 0
        self.last_error = None
        logger.info("write status: %s at %s", remote_status, status.observed_at.isoformat())
        return status
