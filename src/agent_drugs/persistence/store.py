"""Modifier store: persistence for definitions and assignments.

Provides the ModifierStore protocol consumed by the lifecycle operations and
SQLModifierStore, its implementation on SQLAlchemy Core with an async engine
(aiosqlite by default).
"""

from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Protocol

from sqlalchemy import delete, func, insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
import structlog

from agent_drugs.core.errors import PersistenceError
from agent_drugs.modifiers.models import (
    ActiveModifierAssignment,
    ModifierDefinition,
    ScopeKey,
)
from agent_drugs.persistence.schema import active_drugs_table, drugs_table, metadata

log = structlog.get_logger(__name__)

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def to_epoch_seconds(moment: datetime) -> int:
    """Convert an aware datetime to whole epoch seconds (truncating)."""
    return int(moment.timestamp())


def from_epoch_seconds(value: int) -> datetime:
    """Convert epoch seconds back to an aware UTC datetime."""
    return datetime.fromtimestamp(value, UTC)


def default_database_url() -> str:
    """Return the default SQLite URL under ~/.agent-drugs/data/."""
    db_path = Path.home() / ".agent-drugs" / "data" / "agent-drugs.db"
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{db_path}"


class ModifierStore(Protocol):
    """Persistence contract consumed by the lifecycle operations.

    Every mutation must be atomic at this layer: callers never read-then-write
    to implement an upsert or a purge.
    """

    async def list_definitions(self) -> Sequence[ModifierDefinition]:
        """Return every definition, ordered by name ascending."""
        ...

    async def find_definition(self, name: str) -> ModifierDefinition | None:
        """Return the definition named ``name`` or None."""
        ...

    async def upsert_assignment(
        self,
        scope: ScopeKey,
        name: str,
        instruction_text: str,
        expires_at: datetime,
    ) -> None:
        """Insert or fully replace the assignment keyed by (scope, name)."""
        ...

    async def list_unexpired_assignments(
        self,
        scope: ScopeKey,
        now: datetime,
    ) -> Sequence[ActiveModifierAssignment]:
        """Return assignments with ``expires_at > now``, ordered by name."""
        ...

    async def delete_all_assignments(self, scope: ScopeKey) -> int:
        """Delete every assignment of ``scope`` regardless of expiry."""
        ...


class SQLModifierStore:
    """ModifierStore backed by SQLAlchemy Core.

    Usage:
        store = SQLModifierStore("sqlite+aiosqlite:///agent-drugs.db")
        await store.initialize()
        await store.seed_definitions(DEFAULT_DEFINITIONS)

        definition = await store.find_definition("focus")

        await store.close()
    """

    def __init__(self, database_url: str | None = None) -> None:
        """Initialize the store.

        Args:
            database_url: SQLAlchemy async database URL. Defaults to
                ~/.agent-drugs/data/agent-drugs.db via aiosqlite.
        """
        self._database_url = database_url or default_database_url()
        self._engine: AsyncEngine | None = None

    @property
    def database_url(self) -> str:
        return self._database_url

    async def initialize(self) -> None:
        """Create the engine and the tables. Safe to call repeatedly."""
        if self._engine is None:
            try:
                self._engine = create_async_engine(self._database_url, echo=False)
            except Exception as e:
                raise PersistenceError(
                    f"Failed to create engine for {self._database_url}: {e}",
                    operation="create_engine",
                ) from e

        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(metadata.create_all)
        except Exception as e:
            raise PersistenceError(
                f"Failed to initialize schema: {e}",
                operation="create_all",
            ) from e

    async def close(self) -> None:
        """Dispose of the engine and its connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None

    def _require_engine(self, operation: str) -> AsyncEngine:
        if self._engine is None:
            raise PersistenceError(
                "ModifierStore not initialized. Call initialize() first.",
                operation=operation,
            )
        return self._engine

    async def seed_definitions(self, definitions: Sequence[ModifierDefinition]) -> int:
        """Insert ``definitions`` when the catalog is empty.

        Definitions are write-once: an already seeded catalog is left alone.

        Returns:
            Number of definitions inserted (0 if the catalog was populated).
        """
        engine = self._require_engine("seed")
        try:
            async with engine.begin() as conn:
                existing = await conn.scalar(select(func.count()).select_from(drugs_table))
                if existing:
                    log.info("store.seed.skipped", existing=existing)
                    return 0
                if not definitions:
                    return 0
                await conn.execute(
                    insert(drugs_table),
                    [
                        {
                            "name": d.name,
                            "prompt": d.instruction_text,
                            "default_duration_minutes": d.default_duration_minutes,
                        }
                        for d in definitions
                    ],
                )
        except Exception as e:
            raise PersistenceError(
                f"Failed to seed definitions: {e}",
                operation="insert",
                table="drugs",
                details={"count": len(definitions)},
            ) from e

        log.info("store.seed.completed", count=len(definitions))
        return len(definitions)

    async def list_definitions(self) -> Sequence[ModifierDefinition]:
        engine = self._require_engine("list_definitions")
        try:
            async with engine.connect() as conn:
                result = await conn.execute(select(drugs_table).order_by(drugs_table.c.name))
                rows = result.mappings().all()
        except Exception as e:
            raise PersistenceError(
                f"Failed to list definitions: {e}",
                operation="select",
                table="drugs",
            ) from e
        return [_definition_from_row(row) for row in rows]

    async def find_definition(self, name: str) -> ModifierDefinition | None:
        engine = self._require_engine("find_definition")
        try:
            async with engine.connect() as conn:
                result = await conn.execute(
                    select(drugs_table).where(drugs_table.c.name == name)
                )
                row = result.mappings().first()
        except Exception as e:
            raise PersistenceError(
                f"Failed to look up definition: {e}",
                operation="select",
                table="drugs",
                details={"name": name},
            ) from e
        return _definition_from_row(row) if row is not None else None

    async def upsert_assignment(
        self,
        scope: ScopeKey,
        name: str,
        instruction_text: str,
        expires_at: datetime,
    ) -> None:
        engine = self._require_engine("upsert_assignment")
        dialect_insert = _UPSERT_DIALECTS.get(engine.dialect.name)
        if dialect_insert is None:
            raise PersistenceError(
                f"Atomic upsert not supported for dialect: {engine.dialect.name}",
                operation="upsert",
                table="active_drugs",
            )

        stmt = dialect_insert(active_drugs_table).values(
            user_id=scope.user_id,
            agent_id=scope.agent_id,
            name=name,
            prompt=instruction_text,
            expires_at=to_epoch_seconds(expires_at),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "agent_id", "name"],
            set_={"prompt": stmt.excluded.prompt, "expires_at": stmt.excluded.expires_at},
        )

        try:
            async with engine.begin() as conn:
                await conn.execute(stmt)
        except Exception as e:
            raise PersistenceError(
                f"Failed to upsert assignment: {e}",
                operation="upsert",
                table="active_drugs",
                details={"scope": str(scope), "name": name},
            ) from e

        log.debug("store.assignment.upserted", scope=str(scope), name=name)

    async def list_unexpired_assignments(
        self,
        scope: ScopeKey,
        now: datetime,
    ) -> Sequence[ActiveModifierAssignment]:
        engine = self._require_engine("list_unexpired_assignments")
        try:
            async with engine.connect() as conn:
                result = await conn.execute(
                    select(active_drugs_table)
                    .where(active_drugs_table.c.user_id == scope.user_id)
                    .where(active_drugs_table.c.agent_id == scope.agent_id)
                    .where(active_drugs_table.c.expires_at > to_epoch_seconds(now))
                    .order_by(active_drugs_table.c.name)
                )
                rows = result.mappings().all()
        except Exception as e:
            raise PersistenceError(
                f"Failed to list active assignments: {e}",
                operation="select",
                table="active_drugs",
                details={"scope": str(scope)},
            ) from e
        return [_assignment_from_row(scope, row) for row in rows]

    async def delete_all_assignments(self, scope: ScopeKey) -> int:
        engine = self._require_engine("delete_all_assignments")
        try:
            async with engine.begin() as conn:
                result = await conn.execute(
                    delete(active_drugs_table)
                    .where(active_drugs_table.c.user_id == scope.user_id)
                    .where(active_drugs_table.c.agent_id == scope.agent_id)
                )
                removed = result.rowcount or 0
        except Exception as e:
            raise PersistenceError(
                f"Failed to delete assignments: {e}",
                operation="delete",
                table="active_drugs",
                details={"scope": str(scope)},
            ) from e

        log.debug("store.assignments.purged", scope=str(scope), removed=removed)
        return removed

    async def count_assignments(self, scope: ScopeKey, name: str | None = None) -> int:
        """Count stored rows for ``scope``, expired ones included.

        Args:
            scope: The scope to count.
            name: Restrict the count to one modifier name.
        """
        engine = self._require_engine("count_assignments")
        query = (
            select(func.count())
            .select_from(active_drugs_table)
            .where(active_drugs_table.c.user_id == scope.user_id)
            .where(active_drugs_table.c.agent_id == scope.agent_id)
        )
        if name is not None:
            query = query.where(active_drugs_table.c.name == name)
        try:
            async with engine.connect() as conn:
                return int(await conn.scalar(query) or 0)
        except Exception as e:
            raise PersistenceError(
                f"Failed to count assignments: {e}",
                operation="select",
                table="active_drugs",
            ) from e


def _definition_from_row(row: Any) -> ModifierDefinition:
    return ModifierDefinition(
        name=row["name"],
        instruction_text=row["prompt"],
        default_duration_minutes=int(row["default_duration_minutes"]),
    )


def _assignment_from_row(scope: ScopeKey, row: Any) -> ActiveModifierAssignment:
    return ActiveModifierAssignment(
        scope=scope,
        name=row["name"],
        instruction_text=row["prompt"],
        expires_at=from_epoch_seconds(int(row["expires_at"])),
    )
