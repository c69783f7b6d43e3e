"""Observability module for agent-drugs.

Main components:
- Logging: configure_logging, get_logger, bind_context, unbind_context
"""

from agent_drugs.observability.logging import (
    LoggingConfig,
    LogMode,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    reset_logging,
    unbind_context,
)

__all__ = [
    "LoggingConfig",
    "LogMode",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "reset_logging",
    "unbind_context",
]
