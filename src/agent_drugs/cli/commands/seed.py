"""Seed command: populate an empty modifier catalog."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from agent_drugs.cli.context import load_cli_config, sqlite_url
from agent_drugs.cli.formatters.panels import print_error, print_info, print_success
from agent_drugs.core.errors import AgentDrugsError
from agent_drugs.modifiers.seed import resolve_definitions
from agent_drugs.persistence.store import SQLModifierStore


async def _seed(database_url: str, seed_file: str | None) -> int:
    definitions = resolve_definitions(seed_file)
    store = SQLModifierStore(database_url)
    await store.initialize()
    try:
        return await store.seed_definitions(definitions)
    finally:
        await store.close()


def seed(
    file: Annotated[
        Path | None,
        typer.Option("--file", "-f", help="YAML file with drug definitions."),
    ] = None,
    db: Annotated[str | None, typer.Option("--db", help="Path to the SQLite database.")] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to config.yaml."),
    ] = None,
) -> None:
    """Seed drug definitions into an empty catalog.

    An already populated catalog is left unchanged.
    """
    config = load_cli_config(config_file)
    database_url = sqlite_url(db) or config.persistence.resolve_url()
    seed_file = str(file) if file else config.catalog.seed_file

    try:
        inserted = asyncio.run(_seed(database_url, seed_file))
    except AgentDrugsError as e:
        print_error(str(e), "Seed Failed")
        raise typer.Exit(1) from e

    if inserted:
        print_success(f"Seeded {inserted} drug definitions")
    else:
        print_info("Catalog already populated; nothing seeded")


__all__ = ["seed"]
