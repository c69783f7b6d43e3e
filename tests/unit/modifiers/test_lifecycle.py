"""Unit tests for agent_drugs.modifiers.lifecycle module."""

import asyncio
from datetime import UTC, datetime, timedelta

from agent_drugs.core.errors import ModifierNotFoundError
from agent_drugs.modifiers import lifecycle
from agent_drugs.modifiers.models import ModifierDefinition
from agent_drugs.modifiers.seed import DEFAULT_DEFINITIONS


class TestListDefinitions:
    async def test_returns_catalog_sorted_by_name(self, store) -> None:
        definitions = await lifecycle.list_definitions(store)

        names = [d.name for d in definitions]
        assert names == sorted(d.name for d in DEFAULT_DEFINITIONS)

    async def test_empty_catalog(self, empty_store) -> None:
        assert list(await lifecycle.list_definitions(empty_store)) == []


class TestTake:
    async def test_take_sets_expiry_from_default_duration(self, store, scope, clock) -> None:
        result = await lifecycle.take(store, scope, "focus", clock())

        assert result.is_ok
        assignment = result.value
        assert assignment.name == "focus"
        assert assignment.scope == scope
        assert assignment.expires_at == clock() + timedelta(minutes=60)

    async def test_every_default_drug_reports_its_duration(self, store, scope, clock) -> None:
        for definition in DEFAULT_DEFINITIONS:
            await lifecycle.take(store, scope, definition.name, clock())

        statuses = await lifecycle.query_active(store, scope, clock())
        remaining = {s.name: s.remaining_minutes for s in statuses}
        assert remaining == {d.name: d.default_duration_minutes for d in DEFAULT_DEFINITIONS}

    async def test_unknown_name_returns_error_and_writes_nothing(
        self, store, scope, clock
    ) -> None:
        result = await lifecycle.take(store, scope, "nonexistent", clock())

        assert result.is_err
        assert isinstance(result.error, ModifierNotFoundError)
        assert result.error.message == "Drug not found: nonexistent"
        assert await store.count_assignments(scope) == 0

    async def test_names_are_case_sensitive(self, store, scope, clock) -> None:
        result = await lifecycle.take(store, scope, "Focus", clock())
        assert result.is_err

    async def test_retake_overwrites_single_row(self, store, scope, clock) -> None:
        await lifecycle.take(store, scope, "focus", clock())
        clock.advance(minutes=30)
        second = await lifecycle.take(store, scope, "focus", clock())

        assert await store.count_assignments(scope, "focus") == 1
        statuses = await lifecycle.query_active(store, scope, clock())
        assert len(statuses) == 1
        assert statuses[0].assignment.expires_at == second.value.expires_at
        assert statuses[0].remaining_minutes == 60

    async def test_concurrent_takes_leave_one_row(self, store, scope, clock) -> None:
        now = clock()

        results = await asyncio.gather(
            *(lifecycle.take(store, scope, "focus", now) for _ in range(25))
        )

        assert all(r.is_ok for r in results)
        assert await store.count_assignments(scope, "focus") == 1
        [status] = await lifecycle.query_active(store, scope, now)
        assert status.remaining_minutes == 60

    async def test_retake_after_expiry_reactivates(self, store, scope, clock) -> None:
        await lifecycle.take(store, scope, "concise", clock())
        clock.advance(minutes=31)
        assert await lifecycle.query_active(store, scope, clock()) == []

        await lifecycle.take(store, scope, "concise", clock())

        assert await store.count_assignments(scope, "concise") == 1
        statuses = await lifecycle.query_active(store, scope, clock())
        assert [s.name for s in statuses] == ["concise"]

    async def test_expiry_truncated_to_whole_seconds(self, store, scope) -> None:
        now = datetime(2025, 1, 1, 12, 0, 0, 750_000, tzinfo=UTC)

        result = await lifecycle.take(store, scope, "focus", now)

        assert result.value.expires_at.microsecond == 0
        statuses = await lifecycle.query_active(store, scope, now)
        assert statuses[0].remaining_minutes == 60


class TestQueryActive:
    async def test_empty_is_normal(self, store, scope, clock) -> None:
        assert await lifecycle.query_active(store, scope, clock()) == []

    async def test_expired_assignment_disappears_without_delete(
        self, store, scope, clock
    ) -> None:
        await lifecycle.take(store, scope, "focus", clock())
        clock.advance(minutes=61)

        assert await lifecycle.query_active(store, scope, clock()) == []
        assert await store.count_assignments(scope) == 1

    async def test_expiry_boundary_is_strict(self, store, scope, clock) -> None:
        await lifecycle.take(store, scope, "focus", clock())

        clock.advance(minutes=59, seconds=59)
        assert len(await lifecycle.query_active(store, scope, clock())) == 1
        clock.advance(seconds=1)
        assert await lifecycle.query_active(store, scope, clock()) == []

    async def test_remaining_minutes_counts_down(self, store, scope, clock) -> None:
        await lifecycle.take(store, scope, "debug", clock())
        clock.advance(minutes=30)

        statuses = await lifecycle.query_active(store, scope, clock())
        assert statuses[0].remaining_minutes == 60

    async def test_sorted_by_name(self, store, scope, clock) -> None:
        for name in ("speed", "creative", "focus"):
            await lifecycle.take(store, scope, name, clock())

        statuses = await lifecycle.query_active(store, scope, clock())
        assert [s.name for s in statuses] == ["creative", "focus", "speed"]

    async def test_scopes_are_isolated(self, store, scope, other_scope, clock) -> None:
        await lifecycle.take(store, scope, "focus", clock())

        assert await lifecycle.query_active(store, other_scope, clock()) == []


class TestDetox:
    async def test_removes_active_and_expired(self, store, scope, clock) -> None:
        await lifecycle.take(store, scope, "concise", clock())
        await lifecycle.take(store, scope, "debug", clock())
        clock.advance(minutes=45)

        removed = await lifecycle.detox(store, scope)

        assert removed == 2
        assert await store.count_assignments(scope) == 0
        assert await lifecycle.query_active(store, scope, clock()) == []

    async def test_noop_when_empty(self, store, scope) -> None:
        assert await lifecycle.detox(store, scope) == 0

    async def test_leaves_other_scopes_alone(self, store, scope, other_scope, clock) -> None:
        await lifecycle.take(store, scope, "focus", clock())
        await lifecycle.take(store, other_scope, "focus", clock())

        await lifecycle.detox(store, scope)

        statuses = await lifecycle.query_active(store, other_scope, clock())
        assert [s.name for s in statuses] == ["focus"]


class TestExpiryFor:
    def test_adds_duration_and_drops_microseconds(self) -> None:
        now = datetime(2025, 1, 1, 12, 0, 0, 999_999, tzinfo=UTC)
        definition = ModifierDefinition("x", "y", 15)

        assert lifecycle.expiry_for(definition, now) == datetime(
            2025, 1, 1, 12, 15, 0, tzinfo=UTC
        )
