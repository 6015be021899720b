"""Typer CLI commands: scan, show, signals, config, version."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from stackscout.cli.display import (
    console,
    err_console,
    get_version_string,
    print_error,
    print_framework_table,
    print_metadata_json,
    print_scan_summary,
    print_settings,
    print_signals,
)

app = typer.Typer(
    name="stackscout",
    help="Detect project stacks and recommend an automation preset",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(get_version_string())
        raise typer.Exit()


def _configure_logging(level: str) -> None:
    if not isinstance(logging.getLevelName(level.upper()), int):
        raise typer.BadParameter(f"Unknown log level: {level}", param_hint="--log-level")
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """Detect project stacks and recommend an automation preset."""
    _configure_logging(log_level)


@app.command()
def scan(
    path: Path = typer.Option(Path.cwd(), "--path", "-p", help="Project path to scan"),
    verbose: bool = typer.Option(
        False, "--json", "--verbose", "-v", help="Also print the full metadata JSON"
    ),
    table: bool = typer.Option(False, "--table", help="Show matched frameworks with provenance"),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", min=0, help="Levels below the root searched for deep patterns"
    ),
    no_write: bool = typer.Option(False, "--no-write", help="Do not write the metadata file"),
) -> None:
    """Scan a project, write its metadata file, and print the recommended preset."""
    from stackscout.config.loader import ConfigError, load_settings
    from stackscout.core.metadata import write_metadata
    from stackscout.detection.detector import ProjectScanner, ScanError

    overrides: dict = {}
    if max_depth is not None:
        overrides.setdefault("scan", {})["max_depth"] = max_depth
    if no_write:
        overrides.setdefault("scan", {})["write_metadata"] = False

    try:
        settings = load_settings(project_path=path, overrides=overrides)
        scanner = ProjectScanner(
            max_depth=settings.scan.max_depth,
            extra_ignore_dirs=settings.scan.extra_ignore_dirs,
        )
        metadata = scanner.scan(path)
    except (ConfigError, ScanError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    written_to = None
    if settings.scan.write_metadata:
        try:
            written_to = write_metadata(
                Path(metadata.workspace_root), metadata, settings.scan.metadata_file
            )
        except OSError as e:
            print_error(f"Could not write metadata file: {e}")
            raise typer.Exit(1)

    print_scan_summary(metadata, written_to)
    if table:
        print_framework_table(metadata)
    if verbose:
        print_metadata_json(metadata)


@app.command()
def show(
    path: Path = typer.Option(Path.cwd(), "--path", "-p", help="Project path"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw metadata JSON"),
) -> None:
    """Show the metadata written by the last scan."""
    from stackscout.config.loader import ConfigError, load_settings
    from stackscout.core.metadata import get_metadata_path, read_metadata

    try:
        settings = load_settings(project_path=path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)

    root = path.resolve()
    metadata = read_metadata(root, settings.scan.metadata_file)
    if metadata is None:
        target = get_metadata_path(root, settings.scan.metadata_file)
        print_error(f"No readable metadata at {target}. Run 'stackscout scan' first.")
        raise typer.Exit(1)

    if as_json:
        print_metadata_json(metadata)
        return

    console.print(f"[dim]Scanned at {metadata.scanned_at}[/dim]")
    print_scan_summary(metadata)
    print_framework_table(metadata)


@app.command()
def signals(
    path: Path = typer.Option(Path.cwd(), "--path", "-p", help="Project path"),
) -> None:
    """Print quick root-level stack signals as JSON."""
    from stackscout.detection.signals import detect_signals

    root = path.resolve()
    try:
        if not root.is_dir():
            print_error(f"Project path is not a directory: {root}")
            raise typer.Exit(1)
        found = detect_signals(root)
    except OSError as e:
        print_error(f"Cannot access project path {root}: {e}")
        raise typer.Exit(1)
    print_signals(found)


@app.command()
def config(
    path: Path = typer.Option(Path.cwd(), "--path", "-p", help="Project path"),
) -> None:
    """Show current configuration."""
    from stackscout.config.loader import ConfigError, find_config_file, load_settings

    try:
        settings = load_settings(project_path=path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_settings(settings, find_config_file(path))


@app.command()
def version() -> None:
    """Show the installed StackScout version."""
    console.print(get_version_string())
