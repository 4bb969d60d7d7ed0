from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.repositories import InMemoryRepository
from todo_api.settings import Settings

START = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class TickingClock:
    """Clock that advances one second on every read, so each mutation gets a later timestamp."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def repo(clock):
    return InMemoryRepository(clock=clock)


@pytest.fixture
def settings():
    return Settings(port=3000, host="127.0.0.1", cors_allow_origins=["*"], log_level="INFO")


@pytest.fixture
def client(settings, repo):
    return TestClient(create_app(settings, repository=repo))
