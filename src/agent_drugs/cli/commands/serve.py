"""Serve command: run the HTTP or stdio transport."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

from pydantic import ValidationError as PydanticValidationError
import typer

from agent_drugs.bootstrap import open_store
from agent_drugs.cli.context import load_cli_config, sqlite_url
from agent_drugs.cli.formatters import stderr_console
from agent_drugs.cli.formatters.panels import print_error, print_info, print_success
from agent_drugs.config.models import AgentDrugsConfig, ServerConfig


async def _run_stdio(config: AgentDrugsConfig) -> None:
    from agent_drugs.mcp.server.adapter import MCPServerAdapter
    from agent_drugs.mcp.server.dispatcher import Dispatcher

    store = await open_store(config)
    try:
        dispatcher = Dispatcher.for_store(store, default_scope=config.scope.to_key())
        server = MCPServerAdapter(dispatcher)
        # stdout is the protocol channel; human output goes to stderr.
        stderr_console.print(f"[green]agent-drugs MCP server on stdio ({store.database_url})[/]")
        await server.serve()
    finally:
        await store.close()


def _run_http(config: AgentDrugsConfig) -> None:
    import uvicorn

    from agent_drugs.mcp.server.http import create_app

    print_success(f"agent-drugs listening on {config.server.host}:{config.server.port}")
    print_info("POST /mcp, GET /health. Press Ctrl+C to stop")
    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )


def serve(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Interface to bind (default from config: 0.0.0.0)."),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Port to listen on (default from config: 3001)."),
    ] = None,
    transport: Annotated[
        str | None,
        typer.Option("--transport", "-t", help="Transport type: http or stdio."),
    ] = None,
    db: Annotated[
        str | None,
        typer.Option("--db", help="Path to the SQLite database."),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to config.yaml."),
    ] = None,
) -> None:
    """Start the agent-drugs server.

    Examples:

        # JSON endpoint on port 3001
        agent-drugs serve

        # MCP client over stdio
        agent-drugs serve --transport stdio
    """
    config = load_cli_config(config_file)

    server_updates = {
        key: value
        for key, value in {"host": host, "port": port, "transport": transport}.items()
        if value is not None
    }
    if server_updates:
        try:
            server = ServerConfig.model_validate(
                {**config.server.model_dump(), **server_updates}
            )
        except PydanticValidationError as e:
            print_error(str(e), "Invalid Option", console=stderr_console)
            raise typer.Exit(2) from e
        config = config.model_copy(update={"server": server})
    if db:
        persistence = config.persistence.model_copy(update={"database_url": sqlite_url(db)})
        config = config.model_copy(update={"persistence": persistence})

    try:
        if config.server.transport == "stdio":
            asyncio.run(_run_stdio(config))
        else:
            _run_http(config)
    except KeyboardInterrupt:
        stderr_console.print("[info]agent-drugs stopped[/]")


__all__ = ["serve"]
