"""Rich panels for important messages."""

from rich.console import Console
from rich.panel import Panel

from agent_drugs.cli.formatters import console as default_console


def _panel(message: str, title: str, style: str, color: str) -> Panel:
    return Panel(
        f"[{style}]{message}[/]",
        title=f"[bold {color}]{title}[/]",
        border_style=color,
        expand=False,
    )


def info_panel(message: str, title: str = "Info") -> Panel:
    return _panel(message, title, "info", "blue")


def warning_panel(message: str, title: str = "Warning") -> Panel:
    return _panel(message, title, "warning", "yellow")


def error_panel(message: str, title: str = "Error") -> Panel:
    return _panel(message, title, "error", "red")


def success_panel(message: str, title: str = "Success") -> Panel:
    return _panel(message, title, "success", "green")


def print_info(message: str, title: str = "Info", *, console: Console | None = None) -> None:
    """Print an info message in a panel."""
    (console or default_console).print(info_panel(message, title))


def print_warning(message: str, title: str = "Warning", *, console: Console | None = None) -> None:
    """Print a warning message in a panel."""
    (console or default_console).print(warning_panel(message, title))


def print_error(message: str, title: str = "Error", *, console: Console | None = None) -> None:
    """Print an error message in a panel."""
    (console or default_console).print(error_panel(message, title))


def print_success(message: str, title: str = "Success", *, console: Console | None = None) -> None:
    """Print a success message in a panel."""
    (console or default_console).print(success_panel(message, title))


__all__ = [
    "error_panel",
    "info_panel",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "success_panel",
    "warning_panel",
]
