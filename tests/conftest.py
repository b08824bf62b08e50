"""Shared pytest fixtures."""

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from venus.app import App
from venus.config import Config
from venus.core.core import Core
from venus.core.storage import Storage
from venus.web.server import create_fastapi_app

TEST_SECRET = "test-session-secret-key-with-at-least-32-bytes"


class FakeClock:
    """Controllable replacement for venus.utils.now."""

    def __init__(self, current: datetime) -> None:
        self.current = current

    def __call__(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current += delta


@pytest.fixture
def config():
    """Configuration with an in-memory database and cheap password hashing."""
    return Config(
        session_secret_key=TEST_SECRET,
        database_url="memory://",
        bcrypt_rounds=4,
        cors_origins=[],
    )


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 6, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def storage():
    return Storage.in_memory()


@pytest.fixture
def core(config, storage, clock):
    return Core(config, storage, clock)


@pytest.fixture
def services(core):
    return core.services


@pytest.fixture
def client(config, storage, clock) -> Iterator[TestClient]:
    """HTTP client for the full FastAPI application."""
    app = App(config, storage, clock)
    with TestClient(create_fastapi_app(app, config)) as test_client:
        yield test_client
