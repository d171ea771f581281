"""
Output formatting utilities for the CLI.

Provides consistent output formatting across all CLI commands.
"""

import json
import logging
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

# Global console instances
console = Console()
err_console = Console(stderr=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")


def print_json(data: Any) -> None:
    """Print machine-readable JSON, unwrapped and uncolored."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def configure_logging(level: str | int) -> None:
    """Route skillmatch log records to stderr through rich."""
    logger = logging.getLogger("skillmatch")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=err_console, show_path=False, show_time=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
