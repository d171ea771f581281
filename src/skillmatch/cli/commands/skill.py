"""
skillmatch skill - Skill registry and matching commands.

Usage:
    skillmatch skill list
    skillmatch skill show go-backend-skill
    skillmatch skill match "how do I write a table driven test in Go"
    skillmatch skill validate ./path/to/skill
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from skillmatch.cli.output import (
    console,
    err_console,
    print_error,
    print_json,
    print_success,
    print_warning,
)
from skillmatch.config import Config, ConfigurationError, get_config
from skillmatch.skills import (
    EmptyQueryError,
    SkillError,
    SkillManager,
    SkillNotFoundError,
)

app = typer.Typer(
    name="skill",
    help="Skill registry and matching.",
)

PathOption = Annotated[
    list[Path] | None,
    typer.Option(
        "--path",
        "-P",
        help="Skills root to load (repeatable). Defaults to the configured paths.",
    ),
]

StrictOption = Annotated[
    bool | None,
    typer.Option(
        "--strict/--lenient",
        help="Fail on malformed skills, or skip them with a warning.",
    ),
]


def _load_config() -> Config:
    try:
        return get_config()
    except ConfigurationError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)


def _get_manager(paths: list[Path] | None, strict: bool | None = None) -> SkillManager:
    """Build a manager from configuration and command-line overrides."""
    manager = SkillManager(paths=list(paths) if paths else None, config=_load_config(), strict=strict)
    try:
        manager.reload()
    except SkillError as e:
        print_error(f"Failed to load skills: {e}")
        raise typer.Exit(1)

    for issue in manager.registry.issues:
        err_console.print(f"[yellow]![/yellow] Skipped {issue.path}: {escape(issue.message)}")
    return manager


def _truncate(text: str, limit: int) -> str:
    text = " ".join(text.split())
    return text[:limit] + "..." if len(text) > limit else text


@app.command("list")
def list_skills(
    paths: PathOption = None,
    strict: StrictOption = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """List available skills."""
    manager = _get_manager(paths, strict)
    registry = manager.registry

    if json_output:
        print_json(registry.catalog())
        return

    if not len(registry):
        console.print("[yellow]No skills found.[/yellow]")
        console.print(f"[dim]Searched: {', '.join(str(p) for p in manager.paths)}[/dim]")
        return

    table = Table(title="Available Skills")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Refs", style="dim", justify="right")

    for descriptor in registry.list():
        table.add_row(
            descriptor.name,
            _truncate(descriptor.description, 60),
            str(len(descriptor.references)),
        )

    console.print(table)
    console.print(f"\n[dim]Total: {len(registry)} skill(s)[/dim]")


@app.command()
def show(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    paths: PathOption = None,
    strict: StrictOption = None,
) -> None:
    """Show skill details, references and related skills."""
    manager = _get_manager(paths, strict)

    try:
        info = manager.get_skill_info(name)
    except SkillNotFoundError:
        print_error(f"Skill not found: {name}")
        raise typer.Exit(1)

    lines = [
        f"[bold]Name:[/bold] {info['name']}",
        f"[bold]Description:[/bold] {info['description']}",
    ]
    if info["version"]:
        lines.append(f"[bold]Version:[/bold] {info['version']}")

    lines.append("")
    lines.append(f"[bold]Triggers:[/bold] {', '.join(info['triggers']) or '(none)'}")
    lines.append(f"[bold]Related:[/bold] {', '.join(info['related_skills']) or '(none)'}")

    if info["references"]:
        lines.append("")
        lines.append("[bold]References:[/bold]")
        for ref in info["references"]:
            lines.append(f"  - {ref['title']} [dim]({ref['path']})[/dim]")

    if info["path"]:
        lines.append("")
        lines.append(f"[bold]Path:[/bold] {info['path']}")

    console.print(Panel("\n".join(lines), title=f"Skill: {info['name']}"))

    missing = sorted(set(info["related_skills"]) - set(info["related_resolved"]))
    if missing:
        print_warning(f"Related skills not installed: {', '.join(missing)}")


@app.command()
def match(
    query: Annotated[
        str,
        typer.Argument(
            help="Request to match, in any language.",
        ),
    ],
    max_results: Annotated[
        int | None,
        typer.Option(
            "--max",
            "-n",
            help="Maximum number of results (0 for all).",
        ),
    ] = None,
    min_score: Annotated[
        float | None,
        typer.Option(
            "--min-score",
            help="Only show skills scoring above this value.",
        ),
    ] = None,
    paths: PathOption = None,
    strict: StrictOption = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Rank skills by relevance to a request."""
    manager = _get_manager(paths, strict)
    if min_score is not None:
        manager.matcher.settings = manager.matcher.settings.model_copy(update={"min_score": min_score})

    try:
        result = manager.match(query, max_results=max_results)
    except EmptyQueryError:
        print_error("Query must not be empty.")
        raise typer.Exit(1)

    if json_output:
        print_json({"query": result.query, "results": [entry.to_dict() for entry in result]})
        return

    if not result:
        print_warning(f"No matching skill for '{escape(query)}'")
        return

    print_success(f"Best match: [cyan]{result.best.name}[/cyan]")

    table = Table(title="Ranking")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Score", justify="right")
    table.add_column("Triggers", style="dim")

    for position, entry in enumerate(result, start=1):
        table.add_row(
            str(position),
            entry.name,
            f"{entry.score:.3f}",
            ", ".join(entry.breakdown.matched_triggers),
        )

    console.print(table)


@app.command("validate")
def validate_skill(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path to skill directory.",
        ),
    ],
) -> None:
    """Validate a skill directory."""
    issues = SkillManager(paths=[], config=_load_config()).validate_skill(path)

    if not issues:
        print_success("Skill is valid!")
        return

    errors = [i for i in issues if not i.startswith("Warning:")]
    warnings = [i for i in issues if i.startswith("Warning:")]

    if errors:
        console.print("[red]Validation errors:[/red]")
        for error in errors:
            console.print(f"  [red]- {error}[/red]")

    if warnings:
        console.print("[yellow]Warnings:[/yellow]")
        for warning in warnings:
            console.print(f"  [yellow]- {warning}[/yellow]")

    if errors:
        raise typer.Exit(1)
