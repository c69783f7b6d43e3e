"""Helpers shared by the CLI commands: configuration, scope and store."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import typer

from agent_drugs.bootstrap import open_store
from agent_drugs.cli.formatters import stderr_console
from agent_drugs.cli.formatters.panels import print_error
from agent_drugs.config.loader import load_config
from agent_drugs.config.models import AgentDrugsConfig
from agent_drugs.core.errors import ConfigError
from agent_drugs.modifiers.models import ScopeKey
from agent_drugs.observability.logging import configure_logging
from agent_drugs.persistence.store import SQLModifierStore


def load_cli_config(config_file: Path | None = None) -> AgentDrugsConfig:
    """Load configuration and configure logging, exiting with 1 on failure."""
    try:
        config = load_config(config_file)
    except ConfigError as e:
        print_error(str(e), "Configuration Error", console=stderr_console)
        raise typer.Exit(1) from e

    configure_logging(config.logging)
    return config


def sqlite_url(db: str | None) -> str | None:
    """Turn a --db path into an aiosqlite URL; None when not given."""
    if not db:
        return None
    path = Path(db).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{path}"


def resolve_scope(config: AgentDrugsConfig, user: str | None, agent: str | None) -> ScopeKey:
    """Return the configured scope with --user / --agent applied."""
    return ScopeKey(
        user_id=user or config.scope.user_id,
        agent_id=agent or config.scope.agent_id,
    )


@asynccontextmanager
async def opened_store(config: AgentDrugsConfig, db: str | None) -> AsyncIterator[SQLModifierStore]:
    """Open (and seed) the store for one command, closing it afterwards."""
    store = await open_store(config, database_url=sqlite_url(db))
    try:
        yield store
    finally:
        await store.close()
