"""CLI interface for Owner Linkage."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="owner-linkage",
    help="Record similarity scoring and fire-number collision resolution",
    add_completion=False,
)
console = Console()


def get_config():
    """Load configuration from environment (and a local .env file)."""
    from dotenv import load_dotenv

    from .config import MatchingConfig

    load_dotenv()
    return MatchingConfig()


def _read_json(path: Path):
    try:
        return json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error: cannot read {path}: {e}[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Structured log level"),
    json_logs: bool = typer.Option(True, "--json-logs/--plain-logs", help="Render log lines as JSON"),
):
    """Owner Linkage command line."""
    from typing import get_args

    from .logging import LogLevel, configure_logging

    level = log_level.upper()
    if level not in get_args(LogLevel):
        console.print(f"[red]Error: unknown log level {log_level!r} (choose from {', '.join(get_args(LogLevel))})[/red]")
        raise typer.Exit(1)
    configure_logging(level, json_output=json_logs)


@app.command()
def similarity(
    left: str = typer.Argument(..., help="First string"),
    right: str = typer.Argument(..., help="Second string"),
):
    """Score two strings with the vowel-aware edit-distance similarity."""
    from .utils.levenshtein import levenshtein_similarity

    console.print(f"{levenshtein_similarity(left, right):.4f}")


@app.command()
def compare(
    left: Path = typer.Argument(..., exists=True, help="JSON file with the first entity"),
    right: Path = typer.Argument(..., exists=True, help="JSON file with the second entity"),
):
    """Compare two entities and show the weighted breakdown."""
    from pydantic import ValidationError

    from .models import Entity
    from .similarity import explain

    config = get_config()
    try:
        a = Entity.model_validate(_read_json(left))
        b = Entity.model_validate(_read_json(right))
    except ValidationError as e:
        console.print(f"[red]Error: invalid entity: {e}[/red]")
        raise typer.Exit(1)

    breakdown = explain(a, b, config)

    table = Table(title=f"{a.display_name} vs {b.display_name}")
    table.add_column("Component")
    table.add_column("Similarity")
    table.add_column("Weight")
    table.add_column("Contribution")
    for name, component in breakdown.components.items():
        table.add_row(
            name,
            f"{component.similarity:.4f}",
            f"{component.weight:.4f}",
            f"{component.contribution:.4f}",
        )
    console.print(table)
    console.print(f"[bold]Overall:[/bold] {breakdown.overall:.4f} ({breakdown.mode})")


@app.command()
def resolve(
    entities: Path = typer.Argument(..., exists=True, help="JSON list of {identifier, entity} rows"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the registry snapshot as JSON"),
):
    """Run fire-number collision resolution over a list of records, in order."""
    from pydantic import ValidationError

    from .collision import CollisionRegistry
    from .collision import resolve as resolve_collision
    from .models import Entity

    config = get_config()
    rows = _read_json(entities)
    if not isinstance(rows, list):
        console.print("[red]Error: expected a JSON list of rows[/red]")
        raise typer.Exit(1)

    registry = CollisionRegistry()

    table = Table(title="Resolution")
    table.add_column("Row", style="dim")
    table.add_column("Record")
    table.add_column("Outcome")
    table.add_column("Fire Number")
    table.add_column("Best Score")

    for index, row in enumerate(rows, start=1):
        try:
            entity = Entity.model_validate(row.get("entity", {}))
        except ValidationError as e:
            console.print(f"[red]Error: row {index} has an invalid entity: {e}[/red]")
            raise typer.Exit(1)
        result = resolve_collision(registry, entity, row.get("identifier"), config)
        table.add_row(
            str(index),
            entity.external_id or entity.display_name,
            result.outcome.value,
            result.identifier or "-",
            f"{result.best_score:.4f}" if result.best_score is not None else "-",
        )
    console.print(table)

    snapshot = registry.snapshot()
    stats = registry.stats()
    console.print(
        f"[bold]Fire numbers:[/bold] {stats.total_bases}  "
        f"[bold]Owners:[/bold] {stats.total_entities}  "
        f"[bold]Shared:[/bold] {stats.bases_with_multiple_owners}"
    )

    if output:
        output.write_text(snapshot.model_dump_json(indent=2))
        console.print(f"[green]Snapshot written to {output}[/green]")


if __name__ == "__main__":
    app()
