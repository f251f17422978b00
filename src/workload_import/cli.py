"""Command-line interface for workload CSV imports."""

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

from workload_import.schemas.entities import EntityKind
from workload_import.utils.logging import configure_logging

if TYPE_CHECKING:
    from workload_import.config.settings import ImportConfig
    from workload_import.importer.collaborators import BulkWriter
    from workload_import.importer.session import ImportSession

app = typer.Typer(
    name="workload-import",
    help="Validate and bulk-import workload planning CSV files.",
    no_args_is_help=True,
)

console = Console()

EntityOption = Annotated[
    EntityKind,
    typer.Option("--entity", "-e", help="Entity type the file contains."),
]
MapOption = Annotated[
    list[str] | None,
    typer.Option(
        "--map",
        "-m",
        help="Override a column mapping as COLUMN=FIELD (empty FIELD unmaps). Repeatable.",
    ),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]


def _parse_overrides(values: list[str] | None) -> list[tuple[str, str | None]]:
    """Split ``COLUMN=FIELD`` options; an empty field means unmapped."""
    overrides: list[tuple[str, str | None]] = []
    for value in values or []:
        column, sep, field = value.partition("=")
        if not sep or not column.strip():
            msg = f"Expected COLUMN=FIELD, got '{value}'"
            raise typer.BadParameter(msg, param_hint="--map")
        overrides.append((column.strip(), field.strip() or None))
    return overrides


def _load(config: Path | None) -> "ImportConfig":
    from workload_import.config.loader import load_config

    import_config = load_config(config)
    configure_logging(import_config.logging.level, import_config.logging.json_output)
    return import_config


def _open_session(
    file: Path,
    entity: EntityKind,
    overrides: list[tuple[str, str | None]],
    import_config: "ImportConfig",
    writer: "BulkWriter",
) -> "ImportSession":
    """Read and validate a file, apply mapping overrides and show the result."""
    from workload_import.importer import ConsoleNotifier, ImportSession
    from workload_import.ingestion import LocalUpload
    from workload_import.validation import ConsoleReporter

    session = ImportSession(entity, writer, ConsoleNotifier(console), import_config)
    upload = LocalUpload(file, encoding=import_config.upload.encoding)

    try:
        accepted = asyncio.run(session.select_file(upload))
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    if not accepted:
        raise typer.Exit(code=1)

    for column, field in overrides:
        try:
            session.update_mapping(column, field)
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1) from e

    reporter = ConsoleReporter(console)
    reporter.print_mapping(session.headers, session.mapping, session.schema)
    if session.records:
        reporter.print_preview(session.preview(), len(session.records))
    reporter.print_report(session.report())
    return session


@app.command()
def validate(
    file: Annotated[
        Path,
        typer.Argument(help="CSV file to check.", exists=True, dir_okay=False),
    ],
    entity: EntityOption,
    mapping: MapOption = None,
    config: ConfigOption = None,
) -> None:
    """Check a CSV file against an entity's field rules without importing."""
    from workload_import.store import JsonBatchStore

    overrides = _parse_overrides(mapping)
    import_config = _load(config)

    console.print(f"[blue]Validating {file.name} as {entity.value}[/blue]")
    session = _open_session(
        file, entity, overrides, import_config, JsonBatchStore(import_config.store.path)
    )

    if session.violations:
        raise typer.Exit(code=1)


@app.command(name="import")
def import_file(
    file: Annotated[
        Path,
        typer.Argument(help="CSV file to import.", exists=True, dir_okay=False),
    ],
    entity: EntityOption,
    mapping: MapOption = None,
    store: Annotated[
        Path | None,
        typer.Option(
            "--store",
            "-s",
            help="JSON store to write to (defaults to store.path from config).",
            dir_okay=False,
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Accept the column mapping without prompting."),
    ] = False,
    config: ConfigOption = None,
) -> None:
    """Validate a CSV file and bulk-import it if every row is valid."""
    from workload_import.errors import ImportFailedError
    from workload_import.importer import StaticIdentity
    from workload_import.store import JsonBatchStore

    overrides = _parse_overrides(mapping)
    import_config = _load(config)

    store_path = store or import_config.store.path
    identity = (
        StaticIdentity(import_config.store.imported_by)
        if import_config.store.imported_by
        else None
    )
    writer = JsonBatchStore(store_path, identity=identity)

    console.print(f"[blue]Importing {file.name} as {entity.value}[/blue]")
    session = _open_session(file, entity, overrides, import_config, writer)

    if session.violations:
        console.print("[red]Please fix validation errors before importing[/red]")
        raise typer.Exit(code=1)

    if not yes and not typer.confirm("Import with this column mapping?"):
        console.print("[yellow]Import cancelled[/yellow]")
        raise typer.Exit(code=1)
    session.confirm_mapping()

    try:
        outcome = asyncio.run(session.run_import())
    except ImportFailedError as e:
        console.print(f"[dim]{e.reason}[/dim]")
        raise typer.Exit(code=1) from e

    if outcome is None:
        raise typer.Exit(code=1)
    console.print(f"[dim]Store: {store_path}[/dim]")


@app.command()
def sample(
    entity: EntityOption,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Target file or directory (defaults to the current directory).",
        ),
    ] = None,
) -> None:
    """Write the sample CSV file for an entity."""
    from workload_import.schemas.samples import write_sample

    path = write_sample(entity, output or Path.cwd())
    console.print(f"[green]Saved to: {path}[/green]")


@app.command()
def fields(
    entity: Annotated[
        EntityKind | None,
        typer.Option("--entity", "-e", help="Entity to describe (lists all when omitted)."),
    ] = None,
) -> None:
    """List importable entities, or one entity's target fields and rules."""
    from workload_import.schemas.registry import EntityRegistry

    if entity is None:
        table = Table(title="Importable Entities")
        table.add_column("Entity", style="cyan", no_wrap=True)
        table.add_column("Fields", justify="right")
        table.add_column("Description")
        for name in EntityRegistry.list_entities():
            info = EntityRegistry.get_info(name)
            table.add_row(name, str(len(info.schema.fields)), info.description)
        console.print(table)
        return

    info = EntityRegistry.get_info(entity)
    table = Table(title=f"{info.schema.title} Fields")
    table.add_column("Field", style="cyan")
    table.add_column("Required")
    table.add_column("Rules", style="blue")

    for spec in info.schema.fields:
        rules = ", ".join(rule.describe() for rule in spec.type_rules)
        table.add_row(spec.name, "yes" if spec.required else "no", rules or "-")

    console.print(table)
    console.print(f"[dim]{info.description}[/dim]")


@app.command()
def version() -> None:
    """Show version information."""
    from workload_import import __version__

    console.print(f"workload-import version {__version__}")


if __name__ == "__main__":
    app()
