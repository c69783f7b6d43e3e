"""Tool commands: show the catalog and call a tool in process."""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any

import typer

from agent_drugs.cli.context import load_cli_config, opened_store, resolve_scope
from agent_drugs.cli.formatters.tables import create_tools_table, print_table
from agent_drugs.config.models import AgentDrugsConfig
from agent_drugs.core.errors import AgentDrugsError
from agent_drugs.mcp.server.dispatcher import TOOLS_CALL, Dispatcher
from agent_drugs.mcp.tools.catalog import TOOL_CATALOG
from agent_drugs.mcp.types import HARD_ERROR_CODE, MCPRequest


def tools() -> None:
    """Show the tools the server advertises."""
    print_table(create_tools_table(TOOL_CATALOG, "agent-drugs tools"))


async def _call(
    config: AgentDrugsConfig,
    tool: str,
    arguments: dict[str, Any],
    user: str | None,
    agent: str | None,
    db: str | None,
) -> dict[str, Any]:
    async with opened_store(config, db) as store:
        dispatcher = Dispatcher.for_store(store, default_scope=config.scope.to_key())
        request = MCPRequest(method=TOOLS_CALL, params={"name": tool, "arguments": arguments})
        response = await dispatcher.handle(request, resolve_scope(config, user, agent))
    return response.to_dict()


def call(
    tool: Annotated[str, typer.Argument(help="Tool to call, e.g. take_drug.")],
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="Drug name (take_drug)."),
    ] = None,
    user: Annotated[str | None, typer.Option("--user", help="User id of the scope.")] = None,
    agent: Annotated[str | None, typer.Option("--agent", help="Agent id of the scope.")] = None,
    db: Annotated[str | None, typer.Option("--db", help="Path to the SQLite database.")] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to config.yaml."),
    ] = None,
) -> None:
    """Call a tool and print the response envelope as JSON.

    Examples:

        agent-drugs call list_drugs

        agent-drugs call take_drug --name focus
    """
    config = load_cli_config(config_file)
    arguments = {"name": name} if name is not None else {}

    try:
        envelope = asyncio.run(_call(config, tool, arguments, user, agent, db))
    except AgentDrugsError as e:
        typer.echo(json.dumps({"error": HARD_ERROR_CODE, "message": str(e)}, ensure_ascii=False))
        raise typer.Exit(1) from e

    typer.echo(json.dumps(envelope, indent=2, ensure_ascii=False))


__all__ = ["call", "tools"]
