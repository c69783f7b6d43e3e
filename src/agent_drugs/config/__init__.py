"""Configuration module for agent-drugs.

Configuration lives in ~/.agent-drugs/config.yaml and may be overridden by
environment variables (see ``loader.ENV_OVERRIDES``).

Usage:
    from agent_drugs.config import load_config

    config = load_config()
    port = config.server.port
"""

from agent_drugs.config.loader import (
    apply_env_overrides,
    create_default_config,
    ensure_config_dir,
    load_config,
)
from agent_drugs.config.models import (
    AgentDrugsConfig,
    CatalogConfig,
    PersistenceConfig,
    ScopeConfig,
    ServerConfig,
    get_config_dir,
    get_default_config,
)

__all__ = [
    "AgentDrugsConfig",
    "CatalogConfig",
    "PersistenceConfig",
    "ScopeConfig",
    "ServerConfig",
    "apply_env_overrides",
    "create_default_config",
    "ensure_config_dir",
    "get_config_dir",
    "get_default_config",
    "load_config",
]
