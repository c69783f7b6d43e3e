"""Core building blocks shared across agent-drugs.

Exports the Result type, the clock alias and the error hierarchy.
"""

from agent_drugs.core.errors import (
    AgentDrugsError,
    ConfigError,
    ModifierNotFoundError,
    PersistenceError,
    ValidationError,
)
from agent_drugs.core.types import Clock, Result, utc_now

__all__ = [
    "AgentDrugsError",
    "Clock",
    "ConfigError",
    "ModifierNotFoundError",
    "PersistenceError",
    "Result",
    "ValidationError",
    "utc_now",
]
