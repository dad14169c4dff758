"""CLI entry point for thumbnail extractor."""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import ExtractionSettings
from .errors import InputFileError
from .extractor import ThumbnailExtractor

console = Console()


def _load_settings(config: Optional[Path], **overrides) -> ExtractionSettings:
    """Load settings from an optional JSON file and apply CLI overrides."""
    settings = ExtractionSettings.from_json(config) if config else ExtractionSettings()

    data = settings.model_dump()
    for key, value in overrides.items():
        if value is None or value == ():
            continue
        data[key] = list(value) if isinstance(value, tuple) else value

    return ExtractionSettings.model_validate(data)


@click.command()
@click.argument("file_path", type=click.Path(path_type=Path))
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="JSON configuration file",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output directory (default: current directory)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["bmp", "png"], case_sensitive=False),
    default=None,
    help="Output image format (default: bmp)",
)
@click.option(
    "--marker",
    "-m",
    "markers",
    multiple=True,
    help="Marker preceding each image record (repeatable, default: Image8)",
)
@click.option("--max-width", type=int, default=None, help="Largest accepted width")
@click.option("--max-height", type=int, default=None, help="Largest accepted height")
@click.option(
    "--channel-order",
    type=click.Choice(["bgr", "rgb"], case_sensitive=False),
    default=None,
    help="Channel order of the embedded pixel data (default: bgr)",
)
@click.option(
    "--log-level",
    "-l",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (overrides config)",
)
@click.option(
    "--report",
    "-r",
    type=click.Path(path_type=Path),
    default=None,
    help="Write a JSON summary report to this path",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit 1 when no image was written or any write failed",
)
def main(
    file_path: Path,
    config: Optional[Path],
    output_dir: Optional[Path],
    output_format: Optional[str],
    markers: Tuple[str, ...],
    max_width: Optional[int],
    max_height: Optional[int],
    channel_order: Optional[str],
    log_level: Optional[str],
    report: Optional[Path],
    strict: bool,
) -> None:
    """
    Extract raw thumbnails embedded in FILE_PATH.

    Every record (marker, one delimiter byte, width and height as 32-bit
    little-endian integers, then width*height*3 bytes of BGR pixels) is
    written as <stem>_extracted_<n>.bmp or .png.
    """
    try:
        settings = _load_settings(
            config,
            output_directory=output_dir,
            output_format=output_format,
            markers=markers,
            max_width=max_width,
            max_height=max_height,
            channel_order=channel_order,
            log_level=log_level.upper() if log_level else None,
        )
    except (ValidationError, ValueError, FileNotFoundError) as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)

    try:
        extractor = ThumbnailExtractor(settings)
    except OSError as e:
        click.echo(f"❌ Configuration error: cannot open log file: {e}", err=True)
        sys.exit(1)

    try:
        result = extractor.extract_file(file_path)
    except InputFileError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    if report:
        extractor.save_summary_report(report)

    extractor.print_summary(console)

    if strict and (result["images_written"] == 0 or result["errors"]):
        sys.exit(1)


@click.command()
@click.argument("file_path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--marker",
    "-m",
    "markers",
    multiple=True,
    help="Marker preceding each image record (repeatable, default: Image8)",
)
@click.option("--max-width", type=int, default=None, help="Largest accepted width")
@click.option("--max-height", type=int, default=None, help="Largest accepted height")
def scan(
    file_path: Path,
    markers: Tuple[str, ...],
    max_width: Optional[int],
    max_height: Optional[int],
) -> None:
    """List the image records in FILE_PATH without writing anything."""
    try:
        settings = _load_settings(
            None,
            markers=markers,
            max_width=max_width,
            max_height=max_height,
            log_level="WARNING",
        )
        records = ThumbnailExtractor(settings).scan_file(file_path)
    except (ValidationError, ValueError, OSError) as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)
    except InputFileError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    table = Table(title=f"Records in {file_path.name}")
    table.add_column("Offset", justify="right")
    table.add_column("#", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Status")

    for record in records:
        if "reason" in record:
            table.add_row(
                str(record["offset"]),
                "",
                "",
                f"[yellow]{record['reason']}[/yellow]",
            )
        else:
            table.add_row(
                str(record["offset"]),
                str(record["sequence"]),
                f"{record['width']}x{record['height']}",
                "[green]ok[/green]",
            )

    console.print(table)


@click.command()
@click.argument("config_file", type=click.Path(path_type=Path))
def validate(config_file: Path) -> None:
    """Validate a configuration file."""
    try:
        settings = ExtractionSettings.from_json(config_file)
    except (ValidationError, ValueError, FileNotFoundError) as e:
        click.echo(f"❌ Configuration error: {e}", err=True)
        sys.exit(1)

    click.echo("✅ Configuration is valid!")
    for key, value in settings.model_dump().items():
        click.echo(f"  {key}: {value}")


@click.group()
def cli() -> None:
    """Thumbnail Extractor CLI."""
    pass


# Add commands to group
cli.add_command(main, "extract")
cli.add_command(scan, "scan")
cli.add_command(validate, "validate")


def run() -> None:
    """Console script entry point; usage errors exit with status 1."""
    try:
        main.main(standalone_mode=False)
    except click.UsageError as e:
        e.show()
        sys.exit(1)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
