"""agent-drugs persistence module - modifier definitions and assignments."""

from agent_drugs.persistence.schema import active_drugs_table, drugs_table, metadata
from agent_drugs.persistence.store import ModifierStore, SQLModifierStore

__all__ = [
    "ModifierStore",
    "SQLModifierStore",
    "active_drugs_table",
    "drugs_table",
    "metadata",
]
