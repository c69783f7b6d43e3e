"""Unit tests for the Rich panel helpers."""

from rich.console import Console
from rich.panel import Panel

from agent_drugs.cli.formatters import AGENT_DRUGS_THEME
from agent_drugs.cli.formatters.panels import error_panel, print_error, success_panel


def test_panels_carry_titles() -> None:
    assert isinstance(success_panel("done"), Panel)
    assert error_panel("boom").title is not None


def test_print_to_given_console() -> None:
    console = Console(width=80, record=True, theme=AGENT_DRUGS_THEME)

    print_error("Configuration file not found", "Configuration Error", console=console)

    output = console.export_text()
    assert "Configuration file not found" in output
    assert "Configuration Error" in output
