"""Hook command group: output for agent host session hooks."""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any

import typer

from agent_drugs.cli.context import load_cli_config, opened_store, resolve_scope
from agent_drugs.config.models import AgentDrugsConfig
from agent_drugs.core.types import utc_now
from agent_drugs.hooks import session_start_context
from agent_drugs.modifiers.models import ScopeKey

app = typer.Typer(
    name="hook",
    help="Agent host hook output.",
    no_args_is_help=True,
)


async def _session_start(
    config: AgentDrugsConfig,
    scope: ScopeKey,
    db: str | None,
) -> dict[str, Any]:
    async with opened_store(config, db) as store:
        return await session_start_context(store, scope, utc_now())


@app.command("session-start")
def session_start(
    user: Annotated[str | None, typer.Option("--user", help="User id of the scope.")] = None,
    agent: Annotated[str | None, typer.Option("--agent", help="Agent id of the scope.")] = None,
    db: Annotated[str | None, typer.Option("--db", help="Path to the SQLite database.")] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to config.yaml."),
    ] = None,
) -> None:
    """Print the SessionStart hook JSON for the active drugs of a scope."""
    config = load_cli_config(config_file)
    scope = resolve_scope(config, user, agent)
    output = asyncio.run(_session_start(config, scope, db))
    typer.echo(json.dumps(output, ensure_ascii=False))


__all__ = ["app"]
