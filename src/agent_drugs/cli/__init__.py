"""agent-drugs CLI, built with Typer and Rich."""

from agent_drugs.cli.main import app

__all__ = ["app"]
