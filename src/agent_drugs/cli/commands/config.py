"""Config command group for agent-drugs."""

from pathlib import Path
from typing import Annotated

import typer

from agent_drugs.cli.context import load_cli_config
from agent_drugs.cli.formatters.panels import print_error, print_success
from agent_drugs.cli.formatters.tables import create_key_value_table, print_table
from agent_drugs.config.loader import create_default_config
from agent_drugs.core.errors import ConfigError

app = typer.Typer(
    name="config",
    help="Manage agent-drugs configuration.",
    no_args_is_help=True,
)


@app.command()
def init(
    directory: Annotated[
        Path | None,
        typer.Option("--dir", help="Directory for config.yaml (default: ~/.agent-drugs)."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config.yaml."),
    ] = False,
) -> None:
    """Write a default config.yaml."""
    try:
        path = create_default_config(directory, overwrite=force)
    except ConfigError as e:
        print_error(str(e), "Configuration Error")
        raise typer.Exit(1) from e
    print_success(f"Created {path}")


@app.command()
def show(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to config.yaml."),
    ] = None,
) -> None:
    """Display the effective configuration, environment overrides included."""
    config = load_cli_config(config_file)
    rows = {
        "server.host": config.server.host,
        "server.port": config.server.port,
        "server.transport": config.server.transport,
        "persistence.database_url": config.persistence.database_url or "-",
        "persistence.database_path": config.persistence.database_path,
        "scope.user_id": config.scope.user_id,
        "scope.agent_id": config.scope.agent_id,
        "catalog.seed_file": config.catalog.seed_file or "(built-in)",
        "catalog.seed_on_startup": config.catalog.seed_on_startup,
        "logging.level": config.logging.level,
        "logging.mode": config.logging.mode.value,
    }
    print_table(create_key_value_table(rows, "Current Configuration"))


__all__ = ["app"]
