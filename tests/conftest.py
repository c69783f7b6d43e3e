"""Shared fixtures: a seeded SQLite store, a controllable clock and scopes."""

from datetime import UTC, datetime, timedelta

import pytest

from agent_drugs.modifiers.models import ScopeKey
from agent_drugs.modifiers.seed import DEFAULT_DEFINITIONS
from agent_drugs.observability.logging import reset_logging
from agent_drugs.persistence.store import SQLModifierStore

START = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Clock whose time only moves when a test advances it."""

    def __init__(self, start: datetime = START) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scope() -> ScopeKey:
    return ScopeKey(user_id="mock-user", agent_id="mock-agent")


@pytest.fixture
def other_scope() -> ScopeKey:
    return ScopeKey(user_id="mock-user", agent_id="other-agent")


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'agent-drugs.db'}"


@pytest.fixture
async def store(db_url):
    """Initialized store seeded with the default catalog."""
    store = SQLModifierStore(db_url)
    await store.initialize()
    await store.seed_definitions(DEFAULT_DEFINITIONS)
    yield store
    await store.close()


@pytest.fixture
async def empty_store(tmp_path):
    """Initialized store with an empty catalog."""
    store = SQLModifierStore(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()
