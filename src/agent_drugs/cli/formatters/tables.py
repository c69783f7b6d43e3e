"""Rich tables for structured data display."""

from collections.abc import Sequence
from typing import Any

from rich.table import Table

from agent_drugs.cli.formatters import console
from agent_drugs.mcp.types import MCPToolDefinition


def create_table(
    title: str | None = None,
    *,
    show_header: bool = True,
    show_lines: bool = False,
    border_style: str = "blue",
    header_style: str = "bold cyan",
) -> Table:
    """Create a Rich Table with consistent agent-drugs styling.

    Example:
        table = create_table("Drugs")
        table.add_column("Name", style="cyan")
        table.add_row("focus")
        print_table(table)
    """
    return Table(
        title=title,
        show_header=show_header,
        show_lines=show_lines,
        border_style=border_style,
        header_style=header_style,
        row_styles=["", "dim"],
    )


def create_key_value_table(
    data: dict[str, Any],
    title: str | None = None,
    *,
    key_style: str = "cyan",
) -> Table:
    """Create a two-column table for key-value data."""
    table = create_table(title, show_header=False)
    table.add_column("Key", style=key_style, no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(str(key), str(value))

    return table


def create_tools_table(tools: Sequence[MCPToolDefinition], title: str = "Tools") -> Table:
    """Create a table listing tool names, descriptions and parameters."""
    table = create_table(title)
    table.add_column("Tool", style="green", no_wrap=True)
    table.add_column("Description")
    table.add_column("Parameters", style="cyan")

    for tool in tools:
        params = ", ".join(
            f"{p.name}{'*' if p.required else ''}: {p.type.value}" for p in tool.parameters
        )
        table.add_row(tool.name, tool.description, params or "-")

    return table


def print_table(table: Table) -> None:
    console.print(table)


__all__ = [
    "create_key_value_table",
    "create_table",
    "create_tools_table",
    "print_table",
]
