"""Unit tests for agent_drugs.persistence.store module."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from agent_drugs.core.errors import PersistenceError
from agent_drugs.modifiers.models import ModifierDefinition
from agent_drugs.modifiers.seed import DEFAULT_DEFINITIONS
from agent_drugs.persistence.store import (
    SQLModifierStore,
    from_epoch_seconds,
    to_epoch_seconds,
)

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)


class TestEpochConversion:
    def test_round_trip_whole_seconds(self) -> None:
        assert from_epoch_seconds(to_epoch_seconds(NOW)) == NOW

    def test_truncates_fraction(self) -> None:
        moment = NOW.replace(microsecond=900_000)
        assert to_epoch_seconds(moment) == to_epoch_seconds(NOW)


class TestStoreInitialization:
    async def test_initialize_twice_is_safe(self, tmp_path) -> None:
        store = SQLModifierStore(f"sqlite+aiosqlite:///{tmp_path / 'init.db'}")
        await store.initialize()
        await store.initialize()
        await store.close()

    async def test_use_before_initialize_raises(self, tmp_path) -> None:
        store = SQLModifierStore(f"sqlite+aiosqlite:///{tmp_path / 'none.db'}")

        with pytest.raises(PersistenceError, match="not initialized"):
            await store.list_definitions()

    async def test_unreachable_database_raises_persistence_error(self, tmp_path) -> None:
        # Parent directory does not exist, so SQLite cannot create the file.
        store = SQLModifierStore(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'x.db'}")

        with pytest.raises(PersistenceError):
            await store.initialize()
        await store.close()

    @pytest.mark.parametrize(
        "url",
        ["sqlite:./mock-agent-drugs.db", "not a database url", "sqlite:///sync-driver.db"],
    )
    async def test_bad_url_raises_persistence_error(self, url: str) -> None:
        store = SQLModifierStore(url)

        with pytest.raises(PersistenceError) as exc_info:
            await store.initialize()

        assert exc_info.value.operation == "create_engine"
        assert store.database_url == url


class TestSeeding:
    async def test_seeds_empty_catalog(self, empty_store) -> None:
        inserted = await empty_store.seed_definitions(DEFAULT_DEFINITIONS)

        assert inserted == len(DEFAULT_DEFINITIONS)
        assert len(await empty_store.list_definitions()) == len(DEFAULT_DEFINITIONS)

    async def test_populated_catalog_is_left_alone(self, store) -> None:
        inserted = await store.seed_definitions(
            [ModifierDefinition("extra", "Extra prompt.", 5)]
        )

        assert inserted == 0
        assert await store.find_definition("extra") is None


class TestDefinitions:
    async def test_find_definition(self, store) -> None:
        definition = await store.find_definition("debug")

        assert definition is not None
        assert definition.default_duration_minutes == 90

    async def test_find_unknown(self, store) -> None:
        assert await store.find_definition("nope") is None

    async def test_list_ordered_by_name(self, store) -> None:
        names = [d.name for d in await store.list_definitions()]
        assert names == sorted(names)


class TestAssignments:
    async def test_upsert_inserts_then_replaces(self, store, scope) -> None:
        await store.upsert_assignment(scope, "focus", "old text", NOW + timedelta(minutes=5))
        await store.upsert_assignment(scope, "focus", "new text", NOW + timedelta(minutes=60))

        assert await store.count_assignments(scope) == 1
        [assignment] = await store.list_unexpired_assignments(scope, NOW)
        assert assignment.instruction_text == "new text"
        assert assignment.expires_at == NOW + timedelta(minutes=60)

    async def test_unexpired_filter_is_strict(self, store, scope) -> None:
        await store.upsert_assignment(scope, "focus", "text", NOW)

        assert await store.list_unexpired_assignments(scope, NOW) == []
        assert len(await store.list_unexpired_assignments(scope, NOW - timedelta(seconds=1))) == 1

    async def test_delete_all_counts_rows(self, store, scope, other_scope) -> None:
        await store.upsert_assignment(scope, "focus", "a", NOW + timedelta(minutes=1))
        await store.upsert_assignment(scope, "speed", "b", NOW - timedelta(minutes=1))
        await store.upsert_assignment(other_scope, "focus", "c", NOW + timedelta(minutes=1))

        assert await store.delete_all_assignments(scope) == 2
        assert await store.count_assignments(scope) == 0
        assert await store.count_assignments(other_scope) == 1

    async def test_concurrent_upserts_leave_one_row(self, store, scope) -> None:
        await asyncio.gather(
            *(
                store.upsert_assignment(scope, "focus", f"text {i}", NOW + timedelta(minutes=i + 1))
                for i in range(25)
            )
        )

        assert await store.count_assignments(scope, "focus") == 1

    async def test_delete_all_on_empty_scope(self, store, scope) -> None:
        assert await store.delete_all_assignments(scope) == 0
