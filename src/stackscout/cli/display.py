"""Rich output helpers: scan summary, framework table, metadata JSON, errors."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from stackscout import __version__

if TYPE_CHECKING:
    from stackscout.config.settings import StackScoutSettings
    from stackscout.core.metadata import ProjectMetadata

console = Console()
err_console = Console(stderr=True)

NO_FRAMEWORKS = "No specific frameworks"


def _source_revision(checkout: Path) -> str | None:
    """Short commit of a source checkout, with a marker for local edits."""
    try:
        import git
    except ImportError:
        return None

    try:
        repo = git.Repo(checkout)
        revision = repo.head.commit.hexsha[:7]
        modified = repo.is_dirty()
    except (
        git.exc.InvalidGitRepositoryError,
        git.exc.NoSuchPathError,
        git.exc.GitCommandError,
        ValueError,
    ):
        # Installed wheel, or a checkout without commits
        return None
    return f"{revision}, modified" if modified else revision


def get_version_string() -> str:
    """Return 'stackscout 0.1.0', plus the commit when run from a checkout."""
    base = f"stackscout {__version__}"
    revision = _source_revision(Path(__file__).resolve().parents[3])
    return f"{base} ({revision})" if revision else base


def format_framework_summary(metadata: ProjectMetadata) -> str:
    if not metadata.frameworks:
        return NO_FRAMEWORKS
    return ", ".join(fw.label for fw in metadata.frameworks)


def _line(label: str, value: str) -> None:
    console.print(f"[bold]{label}:[/bold] {escape(value)}", highlight=False, soft_wrap=True)


def print_scan_summary(metadata: ProjectMetadata, written_to: Path | None = None) -> None:
    """Print the human-readable result of a scan."""
    layout = "Monorepo" if metadata.is_monorepo else "Conventional project"
    _line("Scanned workspace", metadata.workspace_root)
    _line("Detected stacks", format_framework_summary(metadata))
    _line("Layout", layout)
    _line("Recommended preset", metadata.recommended_preset)
    if written_to is not None:
        _line("Metadata written to", str(written_to))


def print_framework_table(metadata: ProjectMetadata) -> None:
    """Display each matched framework with its provenance."""
    if not metadata.frameworks:
        console.print(f"[dim]{NO_FRAMEWORKS}[/dim]")
        return

    table = Table(title="Detected Frameworks", border_style="blue")
    table.add_column("Id", style="bold")
    table.add_column("Label")
    table.add_column("Preset", style="cyan")
    table.add_column("UI")
    table.add_column("Matched by")
    for fw in metadata.frameworks:
        table.add_row(
            fw.id,
            fw.label,
            fw.preset,
            "yes" if fw.provides_ui else "no",
            escape("\n".join(fw.matches)),
        )
    console.print(table)


def print_json(document: str) -> None:
    """Print a JSON document verbatim so it stays machine-readable."""
    console.out(document, highlight=False)


def print_metadata_json(metadata: ProjectMetadata) -> None:
    print_json(metadata.to_json())


def print_signals(signals: dict[str, bool]) -> None:
    print_json(json.dumps({"signals": signals}, indent=2))


def print_settings(settings: StackScoutSettings, config_file: Path | None) -> None:
    if config_file:
        _line("Config file", str(config_file))
    else:
        console.print("[dim]No config file found (using defaults)[/dim]")

    console.print("\n[bold]Scan:[/bold]")
    console.print(f"  Max depth: {settings.scan.max_depth}")
    extra = ", ".join(settings.scan.extra_ignore_dirs) or "none"
    console.print(f"  Extra ignored dirs: {escape(extra)}", highlight=False)
    console.print(f"  Metadata file: {escape(settings.scan.metadata_file)}", highlight=False)
    console.print(f"  Write metadata: {settings.scan.write_metadata}")


def print_error(message: str) -> None:
    """Print a single-line error message to stderr."""
    err_console.print(
        f"[bold red]Error:[/bold red] {escape(message)}", highlight=False, soft_wrap=True
    )
