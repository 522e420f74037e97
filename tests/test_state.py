"""Tests for the published status snapshot and the shared status cell."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

from src.monitor.models import PublishedStatus
from src.monitor.state import StatusCell

BASE = datetime(2025, 1, 1, tzinfo=timezone.utc)


class TestPublishedStatus:
    def test_initial_value_is_unhealthy_and_unset(self) -> None:
        status = PublishedStatus()
        assert status.healthy is False
        assert status.observed_at is None
        assert status.to_dict() == {"success": False, "lastCheckedAt": None}

    def test_to_dict_uses_iso_timestamp(self) -> None:
        status = PublishedStatus(healthy=True, observed_at=BASE, remote_status="RUNNING")
        data = status.to_dict()
        assert data["success"] is True
        assert datetime.fromisoformat(data["lastCheckedAt"]) == BASE


class TestStatusCell:
    def test_starts_with_initial_status(self) -> None:
        assert StatusCell().snapshot() == PublishedStatus()

    def test_publish_replaces_snapshot(self) -> None:
        cell = StatusCell()
        new = PublishedStatus(healthy=True, observed_at=BASE)
        cell.publish(new)
        assert cell.snapshot() is new

    def test_concurrent_readers_see_whole_pairs(self) -> None:
        """Readers racing a writer never combine fields from two publishes."""
        cell = StatusCell()
        stop = threading.Event()
        torn: list[PublishedStatus] = []

        def writer() -> None:
            for i in range(5000):
                cell.publish(PublishedStatus(
                    healthy=i % 2 == 0,
                    observed_at=BASE + timedelta(seconds=i),
                ))
            stop.set()

        def reader() -> None:
            while not stop.is_set():
                snap = cell.snapshot()
                if snap.observed_at is None:
                    if snap.healthy:
                        torn.append(snap)
                    continue
                index = int((snap.observed_at - BASE).total_seconds())
                if snap.healthy != (index % 2 == 0):
                    torn.append(snap)

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for t in readers:
            t.start()
        writer()
        for t in readers:
            t.join()

        assert torn == []
