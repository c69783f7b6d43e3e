"""Rich formatters for CLI output.

Provides the shared Console instances used across the agent-drugs CLI.

Semantic Colors:
- green: success
- yellow: warning
- red: error
- blue: info
"""

from rich.console import Console
from rich.theme import Theme

AGENT_DRUGS_THEME = Theme(
    {
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "info": "blue",
        "muted": "dim",
        "highlight": "bold cyan",
    }
)

console = Console(theme=AGENT_DRUGS_THEME)

# In stdio mode stdout is the protocol channel; human output goes here.
stderr_console = Console(theme=AGENT_DRUGS_THEME, stderr=True)

__all__ = ["AGENT_DRUGS_THEME", "console", "stderr_console"]
