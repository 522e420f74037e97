"""Shared status cell between the poller (single writer) and /alive readers."""

from __future__ import annotations

import logging

from src.monitor.models import PublishedStatus

logger = logging.getLogger(__name__)


class StatusCell:
    """Holds the current PublishedStatus as one immutable snapshot.

    Publishing replaces the reference in a single assignment, so a reader
    gets either the old pair or the new pair, never a mix. Reads take no
    lock and never wait on an in-flight poll.
    """

    def __init__(self, initial: PublishedStatus | None = None) -> None:
        self._current = initial or PublishedStatus()

    def snapshot(self) -> PublishedStatus:
        return self._current

    def publish(self, status: PublishedStatus) -> None:
        previous = self._current
        self._current = status
        if previous.healthy != status.healthy:
            logger.info(
                "Published status changed: healthy=%s → %s",
                previous.healthy, status.healthy,
            )
