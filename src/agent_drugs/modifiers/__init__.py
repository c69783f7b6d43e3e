"""Behavioral modifiers: domain models, lifecycle operations and seed data.

Main exports:
    ScopeKey, ModifierDefinition, ActiveModifierAssignment, ActiveModifierStatus
    take, query_active, detox, list_definitions
    DEFAULT_DEFINITIONS, load_definitions
"""

from agent_drugs.modifiers.lifecycle import detox, list_definitions, query_active, take
from agent_drugs.modifiers.models import (
    ActiveModifierAssignment,
    ActiveModifierStatus,
    ModifierDefinition,
    ScopeKey,
    remaining_minutes,
)
from agent_drugs.modifiers.seed import DEFAULT_DEFINITIONS, load_definitions

__all__ = [
    "DEFAULT_DEFINITIONS",
    "ActiveModifierAssignment",
    "ActiveModifierStatus",
    "ModifierDefinition",
    "ScopeKey",
    "detox",
    "list_definitions",
    "load_definitions",
    "query_active",
    "remaining_minutes",
    "take",
]
