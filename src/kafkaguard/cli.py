"""CLI interface for kafkaguard using Typer framework."""

import json as jsonlib
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kafkaguard import __description__, __version__
from kafkaguard.config import configure_logging, load_settings
from kafkaguard.lifecycle import ClientKind, validate_for_kind
from kafkaguard.validation import DefaultConfigurationValidator, ValidationResult

app = typer.Typer(
    name="kafkaguard",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()


class Role(str, Enum):
    """Client role whose rule bundle is applied."""
    PRODUCER = "producer"
    CONSUMER = "consumer"
    ADMIN = "admin"
    GENERIC = "generic"


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"kafkaguard version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """kafkaguard - validate Kafka client configuration."""


def _parse_override(raw: str) -> tuple[str, str]:
    key, separator, value = raw.partition("=")
    if not separator or not key.strip():
        raise ValueError(f"Invalid --set value '{raw}', expected key=value")
    return key.strip(), value


def _load_properties(path: Path, overrides: list[str]) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            properties = jsonlib.load(f)
        except jsonlib.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}")

    if not isinstance(properties, dict):
        raise ValueError(f"{path} must contain a JSON object of properties")

    for raw in overrides:
        key, value = _parse_override(raw)
        properties[key] = value
    return properties


def _print_table(result: ValidationResult) -> None:
    if result.is_valid and not result.has_warnings:
        console.print("[green]Configuration is valid - no issues found![/green]")
        return

    status_color = "green" if result.is_valid else "red"
    status = "VALID" if result.is_valid else "INVALID"
    console.print(f"[{status_color}]Validation Status: {status}[/{status_color}]")

    issues_table = Table()
    issues_table.add_column("Severity", style="white")
    issues_table.add_column("Type", style="cyan")
    issues_table.add_column("Property", style="cyan")
    issues_table.add_column("Message", style="white")

    for error in result.errors:
        issues_table.add_row("[red]ERROR[/red]", error.type.value, error.property_name or "", error.message)
    for warning in result.warnings:
        issues_table.add_row("[yellow]WARN[/yellow]", warning.type.value, warning.property_name or "",
                             warning.message)

    console.print(issues_table)

    suggestions = result.recovery_suggestions
    if suggestions:
        console.print("\n[blue]Suggestions:[/blue]")
        for index, suggestion in enumerate(suggestions, start=1):
            console.print(f"  {index}. {suggestion}", markup=False)


@app.command()
def validate(
    path: Annotated[
        Path,
        typer.Argument(help="JSON file holding the client property map")
    ],
    role: Annotated[
        Role,
        typer.Option("--role", "-r", help="Rule bundle to apply")
    ] = Role.GENERIC,
    overrides: Annotated[
        Optional[list[str]],
        typer.Option("--set", "-s", help="Override a property (key=value), repeatable")
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.TABLE,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Treat warnings as failures")
    ] = False,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Settings file path (default: search for .kafkaguard.json)")
    ] = None,
) -> None:
    """Validate a client property map and report every error and warning."""
    try:
        settings = load_settings(config)
        configure_logging(settings)

        properties = _load_properties(path, overrides or [])
        validator = DefaultConfigurationValidator(class_aliases=settings.validation.class_aliases)

        if role is Role.GENERIC:
            result = validator.validate(properties)
        else:
            result = validate_for_kind(validator, ClientKind(role.value), properties)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    if format is OutputFormat.JSON:
        typer.echo(jsonlib.dumps(result.to_dict(), indent=2))
    else:
        _print_table(result)

    fail_on_warnings = strict or settings.validation.fail_on_warnings
    failed = result.has_errors or (fail_on_warnings and result.has_warnings)
    raise typer.Exit(1 if failed else 0)


if __name__ == "__main__":
    app()
