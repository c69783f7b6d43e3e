"""Session-start hook output.

Agent hosts call the hook when a session begins; active modifiers are
injected into the session as additional context.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any

from agent_drugs.modifiers import lifecycle
from agent_drugs.modifiers.models import ActiveModifierStatus, ScopeKey

if TYPE_CHECKING:
    from agent_drugs.persistence.store import ModifierStore

SESSION_START_EVENT = "SessionStart"


def build_session_start_hook(statuses: Sequence[ActiveModifierStatus]) -> dict[str, Any]:
    """Build the hook payload for the given active modifiers.

    The context is empty when nothing is active.
    """
    if not statuses:
        context = ""
    else:
        prompts = "\n\n".join(f"**{s.name}**: {s.instruction_text}" for s in statuses)
        context = (
            "<AGENT_DRUGS_ACTIVE>\n"
            "You currently have the following behavioral modifications active:\n\n"
            f"{prompts}\n"
            "</AGENT_DRUGS_ACTIVE>"
        )

    return {
        "hookSpecificOutput": {
            "hookEventName": SESSION_START_EVENT,
            "additionalContext": context,
        }
    }


async def session_start_context(
    store: ModifierStore,
    scope: ScopeKey,
    now: datetime,
) -> dict[str, Any]:
    """Read the active modifiers of ``scope`` and build the hook payload."""
    statuses = await lifecycle.query_active(store, scope, now)
    return build_session_start_hook(statuses)
