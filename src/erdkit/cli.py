"""CLI interface for erdkit using Typer framework."""

import logging
from pathlib import Path
from typing import Annotated, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from erdkit import __description__, __version__
from erdkit.config import AttributeCategory, DiagramOptions, LogLevel, load_config, merge_options
from erdkit.diagram import Diagram, DiagramVariant, create
from erdkit.domain import Domain, load_domain
from erdkit.errors import ErdError
from erdkit.filters import filter_attributes
from erdkit.renderers import FILE_EXTENSIONS, RENDERERS

app = typer.Typer(
    name="erdkit",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}

DomainArgument = Annotated[Path, typer.Argument(help="Path to the JSON domain document")]
OnlyOption = Annotated[
    Optional[List[str]],
    typer.Option("--only", help="Only draw entities related to this entity (repeatable)")
]
ExcludeOption = Annotated[
    Optional[List[str]],
    typer.Option("--exclude", help="Never draw this entity (repeatable)")
]
AttributesOption = Annotated[
    Optional[List[AttributeCategory]],
    typer.Option("--attributes", "-a", help="Attribute category to display (repeatable)")
]
IndirectOption = Annotated[
    Optional[bool],
    typer.Option("--indirect/--no-indirect", help="Include indirect (through) relationships")
]
InheritanceOption = Annotated[
    Optional[bool],
    typer.Option("--inheritance/--no-inheritance", help="Include inheritance specializations")
]
PolymorphismOption = Annotated[
    Optional[bool],
    typer.Option("--polymorphism/--no-polymorphism", help="Include polymorphic specializations")
]
DisconnectedOption = Annotated[
    Optional[bool],
    typer.Option("--disconnected/--no-disconnected", help="Include entities without relationships")
]
WarnOption = Annotated[
    Optional[bool],
    typer.Option("--warn/--no-warn", help="Show warnings while generating")
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Configuration file path (default: search for .erdkit.json)")
]
LogLevelOption = Annotated[
    Optional[LogLevel],
    typer.Option("--log-level", help="Logging level (default: from configuration)")
]


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"erdkit version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """erdkit - Entity-relationship diagrams from relational domain models."""


def _configure_logging(level: LogLevel | str) -> None:
    """Route erdkit log records to stderr through Rich."""
    package_logger = logging.getLogger("erdkit")
    package_logger.setLevel(LOG_LEVELS[LogLevel(level)])
    if not any(isinstance(handler, RichHandler) for handler in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=err_console, show_path=False, show_time=False))


def _collect_overrides(
    only: list[str] | None,
    exclude: list[str] | None,
    attributes: list[AttributeCategory] | None,
    **flags: bool | None,
) -> dict:
    """Build per-run option overrides from the options actually given."""
    overrides = {}
    if only:
        overrides["only"] = only
    if exclude:
        overrides["exclude"] = exclude
    if attributes:
        overrides["attributes"] = attributes
    for name, value in flags.items():
        if value is not None:
            overrides[name] = value
    return overrides


def _prepare(
    domain_path: Path,
    config: Path | None,
    log_level: LogLevel | None,
) -> tuple[Domain, DiagramOptions]:
    erdkit_config = load_config(config)
    _configure_logging(log_level or erdkit_config.logging.level)
    return load_domain(domain_path), erdkit_config.diagram


@app.command()
def render(
    domain_path: DomainArgument,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: mermaid, yuml (default: mermaid)")
    ] = "mermaid",
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Output file path (default: stdout)")
    ] = None,
    title: Annotated[
        Optional[str],
        typer.Option("--title", "-t", help="Diagram title")
    ] = None,
    only: OnlyOption = None,
    exclude: ExcludeOption = None,
    attributes: AttributesOption = None,
    indirect: IndirectOption = None,
    inheritance: InheritanceOption = None,
    polymorphism: PolymorphismOption = None,
    disconnected: DisconnectedOption = None,
    warn: WarnOption = None,
    config: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """Render an entity-relationship diagram of a domain document."""
    if format not in RENDERERS:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(RENDERERS)}")
        raise typer.Exit(1)

    try:
        domain, defaults = _prepare(domain_path, config, log_level)
        overrides = _collect_overrides(
            only, exclude, attributes,
            indirect=indirect,
            inheritance=inheritance,
            polymorphism=polymorphism,
            disconnected=disconnected,
            warn=warn,
        )
        if title is not None:
            overrides["title"] = title

        rendered = create(RENDERERS[format], domain, overrides, defaults=defaults)

        if out:
            output_file = out.resolve()
            if output_file.is_dir():
                output_file = output_file / f"{domain.name}{FILE_EXTENSIONS[format]}"
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(rendered)
            console.print(f"[green]Diagram generated:[/green] {output_file}")
        else:
            typer.echo(rendered, nl=not rendered.endswith("\n"))

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except ErdError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def entities(
    domain_path: DomainArgument,
    only: OnlyOption = None,
    exclude: ExcludeOption = None,
    attributes: AttributesOption = None,
    indirect: IndirectOption = None,
    inheritance: InheritanceOption = None,
    polymorphism: PolymorphismOption = None,
    disconnected: DisconnectedOption = None,
    warn: WarnOption = None,
    config: ConfigOption = None,
    log_level: LogLevelOption = None,
) -> None:
    """List the entities that a diagram with these options would draw."""
    try:
        domain, defaults = _prepare(domain_path, config, log_level)
        options = merge_options(defaults, _collect_overrides(
            only, exclude, attributes,
            indirect=indirect,
            inheritance=inheritance,
            polymorphism=polymorphism,
            disconnected=disconnected,
            warn=warn,
        ))
        views = Diagram(DiagramVariant(name="entities"), domain, options).build_views()
    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except ErdError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table(title=f"Entities in {domain.name}")
    table.add_column("Entity", style="cyan")
    table.add_column("Attributes", justify="right")
    table.add_column("Relationships", justify="right")
    table.add_column("Flags", style="dim")

    for entity in views.entities:
        flags = [
            flag for flag, present in (
                ("specialized", entity.specialized),
                ("generalized", entity.generalized),
                ("disconnected", entity.disconnected),
            ) if present
        ]
        table.add_row(
            entity.name,
            str(len(filter_attributes(entity, options))),
            str(len(entity.relationships)),
            ", ".join(flags),
        )

    console.print(table)
    console.print(
        f"[blue]{len(views.entities)} entities, {len(views.relationships)} relationships, "
        f"{len(views.specializations)} specializations[/blue]"
    )


if __name__ == "__main__":
    app()
