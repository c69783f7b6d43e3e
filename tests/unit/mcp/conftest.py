"""Shared fixtures for tool protocol tests."""

import pytest

from agent_drugs.mcp.server.dispatcher import Dispatcher
from agent_drugs.mcp.server.protocol import ToolCallContext


@pytest.fixture
def dispatcher(store, scope, clock) -> Dispatcher:
    """Dispatcher over the seeded store with the fake clock."""
    return Dispatcher.for_store(store, default_scope=scope, clock=clock)


@pytest.fixture
def context(scope, clock) -> ToolCallContext:
    return ToolCallContext(scope=scope, now=clock())
