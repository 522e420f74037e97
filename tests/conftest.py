"""Shared test fixtures."""

from __future__ import annotations

import pytest

from src.config import MonitorSettings
from tests.fakes import FakeClock


@pytest.fixture
def settings() -> MonitorSettings:
    return MonitorSettings(
        _env_file=None,
        monitor_service_id="svc-1",
        monitor_environment_id="env-1",
        monitor_zeabur_token="secret-token",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
