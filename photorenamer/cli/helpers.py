"""CLI helper functions for PhotoRenamer.

This module provides shared utilities to reduce code duplication across CLI commands.
"""

import logging
from pathlib import Path
from typing import Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from photorenamer.config import ConfigLoader, ConfigurationError, PhotoRenamerConfig
from photorenamer.core.models import DuplicateGroupCollection, TransferReport
from photorenamer.utils.logging import LOGGER_NAME, setup_logging

T = TypeVar("T")

# Plans longer than this are summarized instead of listed in full
MAX_PLAN_ROWS = 20


def validate_source_dir(path: Path, console: Console) -> Path:
    """Validate and resolve a source directory path.

    Args:
        path: Path to validate
        console: Rich console for error output

    Returns:
        Resolved Path if valid

    Raises:
        typer.Exit: If path doesn't exist or is not a directory
    """
    resolved = path.resolve()

    if not resolved.exists():
        console.print(f"[red]Error:[/red] Source path not found: {resolved}")
        raise typer.Exit(1)

    if not resolved.is_dir():
        console.print(f"[red]Error:[/red] Source is not a directory: {resolved}")
        raise typer.Exit(1)

    return resolved


def validate_target_dir(path: Optional[Path], console: Console) -> Optional[Path]:
    """Validate and resolve a target directory path.

    Unlike source validation, the target doesn't need to exist yet.

    Args:
        path: Path to validate, None if no target was given
        console: Rich console for error output

    Returns:
        Resolved Path, or None

    Raises:
        typer.Exit: If the path exists but is not a directory
    """
    if path is None:
        return None

    resolved = path.resolve()
    if resolved.exists() and not resolved.is_dir():
        console.print(f"[red]Error:[/red] Target is not a directory: {resolved}")
        raise typer.Exit(1)

    return resolved


def error_exit(console: Console, message: str, code: int = 1) -> None:
    """Print an error message and exit.

    Args:
        console: Rich console for output
        message: Error message to display
        code: Exit code (default: 1)

    Raises:
        typer.Exit: Always raises with the given code
    """
    console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code)


def resolve_option(cli_value: Optional[T], config_value: T) -> T:
    """Resolve an option value: CLI overrides config if explicitly set.

    Args:
        cli_value: Value from CLI (None if not provided)
        config_value: Default value from config

    Returns:
        CLI value if provided, otherwise config value
    """
    return config_value if cli_value is None else cli_value


def load_config(config_path: Optional[Path], console: Console) -> PhotoRenamerConfig:
    """Load and validate configuration, exiting on errors.

    Raises:
        typer.Exit: If the config cannot be loaded or is invalid
    """
    try:
        cfg = ConfigLoader.load(config_path)
    except ConfigurationError as e:
        error_exit(console, str(e))

    errors = ConfigLoader.validate(cfg)
    if errors:
        for error in errors:
            console.print(f"[red]Error:[/red] {error}")
        raise typer.Exit(1)

    return cfg


def apply_logging_config(cfg: PhotoRenamerConfig) -> None:
    """Reconfigure logging from config, keeping DEBUG if --verbose was given."""
    verbose = logging.getLogger(LOGGER_NAME).level == logging.DEBUG
    level = "DEBUG" if verbose else cfg.logging.level
    log_file = Path(cfg.logging.file_path) if cfg.logging.log_to_file else None
    setup_logging(level=level, log_file=log_file, use_colors=cfg.logging.color_output)


def confirm_live_run(console: Console, copy: bool) -> None:
    """Ask before touching any file.

    Raises:
        typer.Exit: With code 1 if the user declines
    """
    action = "copy" if copy else "rename"
    confirm = typer.confirm(
        f"This will {action} all files in the selected directory. Are you sure?",
        default=False,
    )
    if not confirm:
        console.print("Aborted.")
        raise typer.Exit(1)


def print_plan(console: Console, collection: DuplicateGroupCollection, source: Path) -> None:
    """Show the resolved rename pairs."""
    renames = collection.renames

    if not renames:
        return

    def _display(path: Path) -> str:
        try:
            return str(path.relative_to(source))
        except ValueError:
            return str(path)

    if len(renames) <= MAX_PLAN_ROWS:
        table = Table(title="Planned Renames")
        table.add_column("Source", style="cyan", no_wrap=True)
        table.add_column("Target", style="green")

        for pair in renames:
            style = "yellow" if pair.is_duplicate else None
            table.add_row(_display(pair.source.path), _display(pair.target.path), style=style)

        console.print(table)
    else:
        console.print(f"[dim](Showing first 10 of {len(renames)} renames)[/dim]")
        for pair in renames[:10]:
            console.print(f"  {_display(pair.source.path)} → {_display(pair.target.path)}")

    console.print()


def print_summary(console: Console, report: TransferReport) -> None:
    """Show the end-of-run counters."""
    console.print()
    console.print(f"[green]{report.possible_duplicates} possible duplicates found[/green]")

    if report.skipped_duplicates:
        console.print(f"[yellow]{report.skipped_duplicates} duplicates skipped[/yellow]")

    if report.dry_run:
        console.print(f"[green]{report.would_transfer} files would be renamed[/green]")
        console.print("[yellow]Dry run complete. No files were modified.[/yellow]")
    else:
        action_word = "copied" if report.copy else "renamed"
        console.print(f"[green]{report.transferred} files {action_word}[/green]")
