"""agent-drugs CLI main entry point.

Defines the main Typer application and registers every command.
"""

from typing import Annotated

import typer

from agent_drugs import __version__
from agent_drugs.cli.commands import config, hook, seed, serve, tools
from agent_drugs.cli.formatters import console

app = typer.Typer(
    name="agent-drugs",
    help="agent-drugs - time-limited behavioral modifiers for AI agents",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command("serve")(serve.serve)
app.command("tools")(tools.tools)
app.command("call")(tools.call)
app.command("seed")(seed.seed)
app.add_typer(hook.app, name="hook")
app.add_typer(config.app, name="config")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold cyan]agent-drugs[/] version [green]{__version__}[/]")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """agent-drugs - time-limited behavioral modifiers for AI agents.

    Use [bold cyan]agent-drugs COMMAND --help[/] for command-specific help.
    """


__all__ = ["app", "main"]
