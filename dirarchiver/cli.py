"""dirarchiver CLI application with Typer."""

import logging
from pathlib import Path
from typing import Annotated, get_args

import typer

from dirarchiver import __version__
from dirarchiver.app.adapters import FORMAT_ADAPTERS
from dirarchiver.bootstrap import bootstrap_application
from dirarchiver.config import LogLevel, get_settings, set_settings
from dirarchiver.errors import ArchiveBuildError

app = typer.Typer(
    name="dirarchiver",
    help="Archive whole directories into zip, jar, tar, or gzipped tar files",
    add_completion=True,
    no_args_is_help=True,
)

_FORMAT_DESCRIPTIONS = {
    "zip": "Zip archive, DEFLATE compressed, UTF-8 entry names",
    "jar": "Zip archive with a leading META-INF/MANIFEST.MF",
    "tar": "Uncompressed POSIX (pax) tar archive",
    "tgz": "Tar archive compressed with gzip",
}


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"dirarchiver version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"),
    ] = None,
) -> None:
    """dirarchiver - archive whole directories."""
    settings = get_settings()
    if log_level:
        level = log_level.upper()
        if level not in get_args(LogLevel):
            typer.secho(f"Error: Unknown log level: {log_level}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=2)
        settings.log_level = level
    set_settings(settings)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def create(
    source: Annotated[Path, typer.Argument(help="Directory to archive")],
    destination: Annotated[Path, typer.Argument(help="Archive file to write")],
    format: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Archive format (zip, jar, tar, tgz)"),
    ] = None,
    prefix: Annotated[
        str | None,
        typer.Option("--prefix", "-p", help="Path inside the archive to nest the tree under"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output summary as JSON"),
    ] = False,
) -> None:
    """Archive every directory and regular file under SOURCE into DESTINATION."""
    container = bootstrap_application()
    archive_format = format or container.settings.default_format

    try:
        summary = container.archive_service.create_archive(
            destination, source, prefix, format=archive_format
        )
    except ArchiveBuildError as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if json_output:
        from dirarchiver.utils.cli_output import json_response

        typer.echo(json_response("archive_summary", 1, **summary.model_dump()))
        return

    typer.secho(f"✓ Created {summary.format} archive: {summary.destination}", fg=typer.colors.GREEN)
    typer.echo(f"  Directories: {summary.directory_count}")
    typer.echo(f"  Files: {summary.file_count}")
    typer.echo(f"  Payload bytes: {summary.payload_bytes}")
    typer.echo(f"  Entries: {summary.entry_count}")
    if summary.root_prefix:
        typer.echo(f"  Root prefix: {summary.root_prefix}")
    if summary.sha256:
        typer.echo(f"  SHA-256: {summary.sha256}")


@app.command()
def formats() -> None:
    """List supported archive formats."""
    for name in FORMAT_ADAPTERS:
        typer.echo(f"{name:<5} {_FORMAT_DESCRIPTIONS.get(name, '')}")


if __name__ == "__main__":
    app()
