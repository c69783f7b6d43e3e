"""agent-drugs tool handlers.

One handler per catalog entry:
- list_drugs: render the modifier catalog
- take_drug: apply a modifier to the calling scope
- active_drugs: render unexpired modifiers with remaining minutes
- detox: remove every modifier from the calling scope

Handlers render plain text for humans; structured data rides along in
``MCPToolResult.meta`` for in-process callers.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from agent_drugs.core.types import Result
from agent_drugs.mcp.errors import MCPProtocolError, MCPToolError
from agent_drugs.mcp.server.protocol import ToolCallContext
from agent_drugs.mcp.tools.catalog import ACTIVE_DRUGS, DETOX, LIST_DRUGS, TAKE_DRUG
from agent_drugs.mcp.types import MCPToolDefinition, MCPToolResult, SoftErrorCode
from agent_drugs.modifiers import lifecycle
from agent_drugs.modifiers.models import (
    ActiveModifierAssignment,
    ActiveModifierStatus,
    ModifierDefinition,
    remaining_minutes,
)

if TYPE_CHECKING:
    from agent_drugs.mcp.server.protocol import ToolHandler
    from agent_drugs.persistence.store import ModifierStore

log = structlog.get_logger(__name__)

NO_ACTIVE_DRUGS_TEXT = "No active drugs. Take a drug with the take_drug tool."
DETOX_TEXT = "✅ All active drugs removed. Returning to standard behavior."
EXPIRY_FORMAT = "%Y-%m-%d %H:%M:%S UTC"

_BOX_RULE = "═" * 40


def _boxed(header: str, body: str) -> str:
    return f"╔{_BOX_RULE}╗\n║  {header}\n╠{_BOX_RULE}╣\n║  {body}\n╚{_BOX_RULE}╝"


def render_catalog(definitions: Sequence[ModifierDefinition]) -> str:
    """Render the catalog as a human-readable list."""
    lines = ["Available Digital Drugs:", ""]
    for definition in definitions:
        lines.append(f"• {definition.name} ({definition.default_duration_minutes}min)")
        lines.append(f"  {definition.instruction_text}")
        lines.append("")
    return "\n".join(lines)


def render_taken(
    assignment: ActiveModifierAssignment,
    duration_minutes: int,
) -> str:
    """Render the confirmation for a successful take."""
    return (
        f"✅ Successfully took {assignment.name}!\n\n"
        f"{_boxed('🎯 ACTIVE BEHAVIORAL MODIFICATION', assignment.instruction_text)}\n\n"
        f"Duration: {duration_minutes} minutes\n"
        f"Expires: {assignment.expires_at.strftime(EXPIRY_FORMAT)}"
    )


def render_active(statuses: Sequence[ActiveModifierStatus]) -> str:
    """Render the active modifiers, or an explicit empty message."""
    if not statuses:
        return NO_ACTIVE_DRUGS_TEXT
    blocks = [
        f"{_boxed(f'🎯 {status.name}', status.instruction_text)}\n"
        f"Time remaining: {status.remaining_minutes} minutes"
        for status in statuses
    ]
    return "Currently Active Drugs:\n\n" + "\n\n".join(blocks)


@dataclass
class ListDrugsHandler:
    """Handler for the list_drugs tool."""

    store: ModifierStore = field(repr=False)

    @property
    def definition(self) -> MCPToolDefinition:
        return LIST_DRUGS

    async def handle(
        self,
        arguments: dict[str, Any],
        context: ToolCallContext,
    ) -> Result[MCPToolResult, MCPToolError]:
        definitions = await lifecycle.list_definitions(self.store)
        log.debug("mcp.tool.list_drugs", count=len(definitions))
        return Result.ok(
            MCPToolResult.text(
                render_catalog(definitions),
                drugs=[d.name for d in definitions],
            )
        )


@dataclass
class TakeDrugHandler:
    """Handler for the take_drug tool.

    Requires a string ``name`` argument. A missing or non-string name is a
    malformed call; an unknown name is a soft not_found outcome.
    """

    store: ModifierStore = field(repr=False)

    @property
    def definition(self) -> MCPToolDefinition:
        return TAKE_DRUG

    async def handle(
        self,
        arguments: dict[str, Any],
        context: ToolCallContext,
    ) -> Result[MCPToolResult, MCPToolError]:
        name = arguments.get("name")
        if not isinstance(name, str):
            raise MCPProtocolError(
                "Missing drug name",
                method="tools/call",
                tool_name=TAKE_DRUG.name,
            )

        taken = await lifecycle.take(self.store, context.scope, name, context.now)
        if taken.is_err:
            return Result.err(
                MCPToolError(
                    taken.error.message,
                    code=SoftErrorCode.NOT_FOUND,
                    tool_name=TAKE_DRUG.name,
                    details={"name": name},
                )
            )

        assignment = taken.value
        duration_minutes = remaining_minutes(assignment.expires_at, context.now)
        return Result.ok(
            MCPToolResult.text(
                render_taken(assignment, duration_minutes),
                name=assignment.name,
                expires_at=assignment.expires_at.isoformat(),
            )
        )


@dataclass
class ActiveDrugsHandler:
    """Handler for the active_drugs tool."""

    store: ModifierStore = field(repr=False)

    @property
    def definition(self) -> MCPToolDefinition:
        return ACTIVE_DRUGS

    async def handle(
        self,
        arguments: dict[str, Any],
        context: ToolCallContext,
    ) -> Result[MCPToolResult, MCPToolError]:
        statuses = await lifecycle.query_active(self.store, context.scope, context.now)
        return Result.ok(
            MCPToolResult.text(
                render_active(statuses),
                active={s.name: s.remaining_minutes for s in statuses},
            )
        )


@dataclass
class DetoxHandler:
    """Handler for the detox tool. Always succeeds, even with nothing to remove."""

    store: ModifierStore = field(repr=False)

    @property
    def definition(self) -> MCPToolDefinition:
        return DETOX

    async def handle(
        self,
        arguments: dict[str, Any],
        context: ToolCallContext,
    ) -> Result[MCPToolResult, MCPToolError]:
        removed = await lifecycle.detox(self.store, context.scope)
        return Result.ok(MCPToolResult.text(DETOX_TEXT, removed=removed))


def create_tool_handlers(store: ModifierStore) -> tuple[ToolHandler, ...]:
    """Create the four handlers, in catalog order, bound to ``store``."""
    return (
        ListDrugsHandler(store=store),
        TakeDrugHandler(store=store),
        ActiveDrugsHandler(store=store),
        DetoxHandler(store=store),
    )
