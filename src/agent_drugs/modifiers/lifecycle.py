"""Modifier lifecycle operations.

These are the only operations that touch the store at request time:

- take: apply a modifier to a scope (insert or overwrite)
- query_active: read unexpired assignments with their remaining time
- detox: purge every assignment of a scope
- list_definitions: read the catalog

Expiry is lazy. Nothing deletes an expired row; it simply stops matching
``expires_at > now``. Every time-dependent operation takes ``now`` from the
caller rather than reading a clock.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

import structlog

from agent_drugs.core.errors import ModifierNotFoundError
from agent_drugs.core.types import Result
from agent_drugs.modifiers.models import (
    ActiveModifierAssignment,
    ActiveModifierStatus,
    ModifierDefinition,
    ScopeKey,
    remaining_minutes,
)

if TYPE_CHECKING:
    from agent_drugs.persistence.store import ModifierStore

log = structlog.get_logger(__name__)


async def list_definitions(store: ModifierStore) -> Sequence[ModifierDefinition]:
    """Return the whole catalog ordered by name."""
    return await store.list_definitions()


async def take(
    store: ModifierStore,
    scope: ScopeKey,
    name: str,
    now: datetime,
) -> Result[ActiveModifierAssignment, ModifierNotFoundError]:
    """Apply the modifier ``name`` to ``scope``.

    Any prior assignment of the same name, expired or not, is superseded in
    full: both the instruction text and the expiry are overwritten.

    Args:
        store: The modifier store.
        scope: Actor receiving the modifier.
        name: Catalog name of the modifier.
        now: Reference time; expiry is ``now + default duration``.

    Returns:
        The stored assignment, or ModifierNotFoundError when the catalog has
        no such name. Nothing is written in the error case.
    """
    definition = await store.find_definition(name)
    if definition is None:
        log.info("lifecycle.take.not_found", scope=str(scope), name=name)
        return Result.err(ModifierNotFoundError(name))

    expires_at = expiry_for(definition, now)
    await store.upsert_assignment(scope, definition.name, definition.instruction_text, expires_at)

    log.info(
        "lifecycle.take.applied",
        scope=str(scope),
        name=definition.name,
        duration_minutes=definition.default_duration_minutes,
        expires_at=expires_at.isoformat(),
    )
    return Result.ok(
        ActiveModifierAssignment(
            scope=scope,
            name=definition.name,
            instruction_text=definition.instruction_text,
            expires_at=expires_at,
        )
    )


async def query_active(
    store: ModifierStore,
    scope: ScopeKey,
    now: datetime,
) -> list[ActiveModifierStatus]:
    """Return the unexpired assignments of ``scope`` with remaining minutes.

    An empty list is a normal outcome.
    """
    assignments = await store.list_unexpired_assignments(scope, now)
    return [
        ActiveModifierStatus(
            assignment=assignment,
            remaining_minutes=remaining_minutes(assignment.expires_at, now),
        )
        for assignment in assignments
    ]


async def detox(store: ModifierStore, scope: ScopeKey) -> int:
    """Remove every assignment of ``scope``, expired or not.

    Returns:
        Number of stored rows removed. Zero is not an error.
    """
    removed = await store.delete_all_assignments(scope)
    log.info("lifecycle.detox.completed", scope=str(scope), removed=removed)
    return removed


def expiry_for(definition: ModifierDefinition, now: datetime) -> datetime:
    """Return the expiry a take of ``definition`` at ``now`` records.

    Truncated to whole seconds, the precision the store keeps.
    """
    return (now + definition.duration).replace(microsecond=0)
