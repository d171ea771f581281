"""
Main Typer application for the skillmatch CLI.

This module defines the root CLI application and registers all command groups.
"""

from typing import Annotated

import typer

from skillmatch import __version__
from skillmatch.cli.commands import config, skill
from skillmatch.cli.output import configure_logging, print_error, print_info
from skillmatch.config import ConfigurationError, get_config

# Create the main Typer app
app = typer.Typer(
    name="skillmatch",
    help="Find the skill document that best fits a request.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"skillmatch version [green]{__version__}[/green]")
        raise typer.Exit()


# noinspection PyUnusedLocal
@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """
    [bold blue]skillmatch[/bold blue] - skill registry and request matcher

    Loads SKILL.md skill directories and selects the skill most relevant
    to a request, in English, Chinese, or both.
    """
    try:
        level = "DEBUG" if verbose else get_config().logging.level
    except ConfigurationError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)
    configure_logging(level)


# Register command groups
app.add_typer(skill.app, name="skill")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
