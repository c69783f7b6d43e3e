"""agent-drugs - time-limited behavioral modifiers for AI agents.

Agents take named "drugs" (instruction texts with a fixed duration) through a
small tool protocol; active drugs are injected into their sessions until they
expire or the agent detoxes.

Example:
    # Using CLI
    agent-drugs serve
    agent-drugs call take_drug --name focus

    # Using Python
    from agent_drugs.modifiers import ScopeKey, take
"""

__version__ = "0.1.0"

__all__ = ["__version__", "main"]


def main() -> None:
    """Main entry point for the agent-drugs CLI."""
    from agent_drugs.cli.main import app

    app()
