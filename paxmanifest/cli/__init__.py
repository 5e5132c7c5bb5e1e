"""
paxmanifest CLI.

Command-line interface for scanning documents into a manifest, deriving
passenger attributes, and inspecting the export layout.
"""

import asyncio
from datetime import date
from pathlib import Path

import click

from paxmanifest import __version__
from paxmanifest.core.schema import DateField


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """paxmanifest: Passenger manifest builder."""
    pass


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "-c", "config_path", help="Path to config YAML")
@click.option("--export", "-o", "export_path", help="Export file (.xlsx, .csv or .jsonl) or directory")
@click.option("--sort", "sort_key", default="last_name", help="Field to sort by")
@click.option("--desc", is_flag=True, help="Sort descending")
@click.option(
    "--filter-field",
    type=click.Choice([f.value for f in DateField]),
    default=DateField.EXPIRY_DATE.value,
    help="Date field to filter on",
)
@click.option("--from", "start_date", help="Filter start date (YYYY-MM-DD)")
@click.option("--to", "end_date", help="Filter end date (YYYY-MM-DD)")
@click.option("--log-level", help="Logging level (overrides config)")
def scan(
    files: tuple[str, ...],
    config_path: str | None,
    export_path: str | None,
    sort_key: str,
    desc: bool,
    filter_field: str,
    start_date: str | None,
    end_date: str | None,
    log_level: str | None,
) -> None:
    """Scan passport images into a manifest."""
    from rich.console import Console

    from paxmanifest.cli.render import render_manifest
    from paxmanifest.config import load_config
    from paxmanifest.core.errors import ConfigError, ExportError
    from paxmanifest.core.logging import setup_logging
    from paxmanifest.core.schema import SortConfig, SortOrder
    from paxmanifest.recognition.gemini import GeminiRecognizer
    from paxmanifest.session import ManifestSession

    console = Console()

    try:
        config = load_config(config_path)
        recognizer = GeminiRecognizer(
            config.api_key,
            model_name=config.model_name,
            temperature=config.temperature,
        )
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    setup_logging(log_level or config.log_level)

    def on_progress(progress) -> None:
        if progress.processed_count:
            console.print(
                f"[{progress.processed_count}/{progress.total_count}] "
                f"[cyan]{progress.percent}%[/cyan]"
            )

    session = ManifestSession(
        recognizer,
        history_depth=config.history_depth,
        retry_policy=config.retry_policy,
        on_progress=on_progress,
    )

    try:
        session.sort = SortConfig(key=sort_key, order=SortOrder.DESC if desc else SortOrder.ASC)
        session.set_filters(filter_field, start_date, end_date)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    console.print(f"\n[bold]Scanning {len(files)} document(s)[/bold]")
    asyncio.run(session.ingest(files))

    render_manifest(console, session.view())

    stats = session.stats
    console.print(
        f"\nCompleted: [green]{stats.completed}[/green]  "
        f"Failed: [red]{stats.errors}[/red]  "
        f"Duplicates: [yellow]{stats.duplicates}[/yellow]"
    )

    if export_path:
        try:
            export_format = None if Path(export_path).suffix else config.export_format
            written = session.export(export_path, format=export_format)
        except ExportError as e:
            click.echo(f"Error: {e}", err=True)
            raise SystemExit(1)
        console.print(f"Exported to [cyan]{written}[/cyan]")


@main.command()
@click.argument("date_of_birth")
@click.option("--gender", "-g", default="", help="MALE or FEMALE")
@click.option("--today", help="Reference date (YYYY-MM-DD), defaults to today")
def derive(date_of_birth: str, gender: str, today: str | None) -> None:
    """Show passenger type and title for DATE_OF_BIRTH (DD/MM/YYYY)."""
    from paxmanifest.core.derive import derive_attributes

    try:
        reference = date.fromisoformat(today) if today else None
    except ValueError:
        click.echo(f"Error: Invalid --today date: {today}", err=True)
        raise SystemExit(1)

    derived = derive_attributes(date_of_birth, gender, reference)
    click.echo(f"Type: {derived.passenger_type.value}")
    click.echo(f"Title: {derived.title or '-'}")


@main.command()
def headers() -> None:
    """Print the export column headers."""
    from paxmanifest.io.export import EXPORT_HEADERS

    for header in EXPORT_HEADERS:
        click.echo(header)


if __name__ == "__main__":
    main()
