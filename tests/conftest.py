"""Shared fixtures for the collector test suite."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure the project root is importable when tests run from another directory.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings  # noqa: E402
from database import DeviceRegistry, ReadingLog  # noqa: E402
from main import create_app  # noqa: E402
from service import CollectorService  # noqa: E402


class FakeClock:
    """Deterministic clock that moves forward one second per call."""

    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(clock: FakeClock) -> DeviceRegistry:
    return DeviceRegistry(clock=clock)


@pytest.fixture
def reading_log() -> ReadingLog:
    return ReadingLog()


@pytest.fixture
def collector(registry: DeviceRegistry, reading_log: ReadingLog) -> CollectorService:
    return CollectorService(registry, reading_log)


@pytest.fixture
def client():
    """HTTP client against a fresh app with empty stores."""

    from fastapi.testclient import TestClient

    app = create_app(Settings())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def device_payload() -> dict:
    return {
        "id": "d1",
        "ip": "10.0.0.5",
        "position": {"latitude": 1, "longitude": 2},
        "status": "online",
    }
