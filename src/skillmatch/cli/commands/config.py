"""
skillmatch config - Configuration inspection commands.

Usage:
    skillmatch config show
    skillmatch config show matcher.min_score
    skillmatch config show --sources
    skillmatch config path
"""

from typing import Annotated

import typer
import yaml
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from skillmatch.cli.output import console, print_error, print_json
from skillmatch.config import ConfigurationError, get_config_sources, get_nested_value, load_config
from skillmatch.storage.paths import get_default_skills_dir, get_global_config_path, get_skillmatch_home

app = typer.Typer(
    name="config",
    help="Configuration inspection.",
)


@app.command()
def show(
    key: Annotated[
        str | None,
        typer.Argument(
            help="Config key to show (e.g., 'matcher', 'matcher.min_score').",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
    sources: Annotated[
        bool,
        typer.Option(
            "--sources",
            help="Show configuration source files.",
        ),
    ] = False,
) -> None:
    """Show the effective (merged) configuration."""
    if sources:
        table = Table(title="Configuration Sources")
        table.add_column("Source", style="cyan")
        table.add_column("Path", style="green")
        table.add_column("Status", no_wrap=True)

        for source_name, source_path in get_config_sources().items():
            if source_path:
                table.add_row(source_name, str(source_path), "[green]loaded[/green]")
            else:
                table.add_row(source_name, "-", "[dim]not found[/dim]")

        console.print(table)
        return

    try:
        config_dict = load_config().model_dump()
    except ConfigurationError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)

    value = config_dict
    if key:
        value = get_nested_value(config_dict, key)
        if value is None:
            print_error(f"Key '{key}' not found in configuration.")
            raise typer.Exit(1)

    if json_output:
        print_json(value)
        return

    output = yaml.dump(value, default_flow_style=False, sort_keys=False, allow_unicode=True)
    syntax = Syntax(output, "yaml", theme="monokai")
    console.print(Panel(syntax, title=f"[cyan]{key}[/cyan]") if key else syntax)


@app.command()
def path() -> None:
    """Show where configuration is read from."""
    console.print(f"Home: {get_skillmatch_home()}")
    console.print(f"Global config: {get_global_config_path()}")
    console.print(f"Default skills: {get_default_skills_dir()}")
