"""Rename commands for PhotoRenamer CLI."""

from pathlib import Path
from typing import Optional

import typer
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from photorenamer.cli._common import _default_cfg, console, default_show
from photorenamer.cli.helpers import (
    apply_logging_config,
    confirm_live_run,
    error_exit,
    load_config,
    print_plan,
    print_summary,
    resolve_option,
    validate_source_dir,
    validate_target_dir,
)
from photorenamer.cli.options import (
    ConfigOpt,
    CopyOpt,
    DryRunOpt,
    ForceOpt,
    SkipDuplicatesOpt,
    SourceArg,
    TargetArg,
)
from photorenamer.config.loader import ConfigurationError, require_replacement, validate_run_options
from photorenamer.core.file_operations import FatalTransferError, FileTransferExecutor
from photorenamer.core.models import FileDescriptor, RenamePair, TransferOutcome
from photorenamer.core.pipeline import RenameMode, create_pipeline
from photorenamer.core.renamer import PatternCompilationError
from photorenamer.core.scanner import EnumerationError
from photorenamer.utils.constants import SUPPORTED_HASH_ALGORITHMS


def _report_skipped(source: FileDescriptor, error: Exception) -> None:
    console.print(f"[yellow]Skipped:[/yellow] {source}: {error}")


def _report_outcome(pair: RenamePair, outcome: TransferOutcome) -> None:
    if outcome == TransferOutcome.SKIPPED_DUPLICATE:
        console.print(f'[dim]=> Duplicate! Skip "{pair.source}"[/dim]')


def run_rename(
    mode: RenameMode,
    source: Path,
    target: Optional[Path],
    *,
    dry_run: bool = False,
    copy: bool = False,
    skip_duplicates: bool = False,
    force: bool = False,
    config: Optional[Path] = None,
    pattern: Optional[str] = None,
    replacement: Optional[str] = None,
    target_filename_pattern: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> None:
    """
    Run one rename mode from option validation to the end-of-run summary.

    Every check that can fail without looking at the files runs before the
    confirmation prompt.

    Raises:
        typer.Exit: With code 1 on configuration errors, a declined
                    confirmation or a fatal error during the run
    """
    cfg = load_config(config, console)
    apply_logging_config(cfg)

    use_pattern: Optional[str] = None
    use_replacement: Optional[str] = None

    try:
        validate_run_options(target, copy=copy, skip_duplicates=skip_duplicates)

        if mode == RenameMode.PATTERN:
            use_pattern = resolve_option(pattern, cfg.patterns.pattern)
            use_replacement = require_replacement(resolve_option(replacement, cfg.patterns.replacement))
        elif mode == RenameMode.DATE_PATTERN:
            use_pattern = resolve_option(pattern, cfg.patterns.date_pattern)
            use_replacement = require_replacement(
                resolve_option(replacement, cfg.patterns.date_replacement)
            )
    except ConfigurationError as e:
        error_exit(console, str(e))

    use_filename_pattern = resolve_option(target_filename_pattern, cfg.patterns.exif_filename_pattern)
    use_algorithm = resolve_option(algorithm, cfg.hashing.algorithm).lower()
    if use_algorithm not in SUPPORTED_HASH_ALGORITHMS:
        error_exit(
            console,
            f"Unsupported hash algorithm: {use_algorithm}. "
            f"Use one of: {', '.join(SUPPORTED_HASH_ALGORITHMS)}.",
        )

    source = validate_source_dir(source, console)
    target_dir = validate_target_dir(target, console)

    try:
        pipeline = create_pipeline(
            mode,
            source,
            target_dir,
            pattern=use_pattern,
            replacement=use_replacement,
            target_filename_pattern=use_filename_pattern,
            algorithm=use_algorithm,
            chunk_size=cfg.hashing.chunk_size,
            ignore_hidden=cfg.general.ignore_hidden_files,
            error_callback=_report_skipped,
        )
    except PatternCompilationError as e:
        error_exit(console, str(e))

    # Show mode
    mode_text = "[yellow]DRY RUN[/yellow]" if dry_run else "[red]LIVE MODE[/red]"
    operation_text = "[green]COPY[/green]" if copy else "[red]MOVE[/red]"
    console.print(f"Mode: {mode_text}")
    console.print(f"Operation: {operation_text}")
    console.print(f"Rename mode: {mode.value}")
    console.print(f"Source: {pipeline.source_root}")
    console.print(f"Target: {pipeline.target_root}")
    if use_pattern is not None:
        console.print(f"Pattern: {use_pattern} → {use_replacement}")
    if skip_duplicates:
        console.print("Duplicates: [yellow]skipped[/yellow]")
    if config:
        console.print(f"[dim]Config: {config}[/dim]")
    console.print()

    if dry_run:
        console.print("[yellow]Performing dry run[/yellow]")
    elif not force and cfg.general.confirm:
        confirm_live_run(console, copy)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Scanning files...", total=None)

        def update_progress(current, total):
            progress.update(task, completed=current, total=total, description="Grouping files...")

        try:
            collection = pipeline.plan(progress_callback=update_progress)
        except (EnumerationError, FileNotFoundError, NotADirectoryError) as e:
            error_exit(console, str(e))

    if not collection.renames:
        console.print("[yellow]No files to rename.[/yellow]")
        return

    print_plan(console, collection, pipeline.source_root)

    executor = FileTransferExecutor(
        dry_run=dry_run,
        copy=copy,
        skip_duplicates=skip_duplicates,
        preserve_metadata=cfg.transfer.preserve_metadata,
        outcome_callback=_report_outcome,
    )

    try:
        report = pipeline.execute(collection, executor)
    except FatalTransferError as e:
        if e.report is not None:
            print_summary(console, e.report)
        error_exit(console, str(e))

    print_summary(console, report)


def create_rename_app() -> typer.Typer:
    """Create and return the rename sub-app with all commands registered."""

    rename_app = typer.Typer(
        name="rename",
        help="Rename files and resolve duplicate names.",
        no_args_is_help=True,
    )

    @rename_app.command("lower")
    def rename_lower(
        source: SourceArg,
        target: TargetArg = None,
        dry_run: DryRunOpt = False,
        copy: CopyOpt = False,
        skip_duplicates: SkipDuplicatesOpt = False,
        force: ForceOpt = False,
        config: ConfigOpt = None,
    ):
        """
        Convert filenames to lowercase.

        Only files with at least one uppercase letter are processed.
        """
        run_rename(
            RenameMode.LOWER, source, target,
            dry_run=dry_run, copy=copy, skip_duplicates=skip_duplicates,
            force=force, config=config,
        )

    @rename_app.command("pattern")
    def rename_pattern(
        source: SourceArg,
        target: TargetArg = None,
        pattern: Optional[str] = typer.Option(
            None, "--pattern", "-p",
            help="Regular expression matched against the filename",
            show_default=default_show(_default_cfg.patterns.pattern),
        ),
        replacement: Optional[str] = typer.Option(
            None, "--replacement", "-r",
            help="Replacement, $1 or \\1 refer to capture groups",
            show_default=default_show(_default_cfg.patterns.replacement),
        ),
        dry_run: DryRunOpt = False,
        copy: CopyOpt = False,
        skip_duplicates: SkipDuplicatesOpt = False,
        force: ForceOpt = False,
        config: ConfigOpt = None,
    ):
        """
        Rename files by regular expression replacement.

        Only files matching the pattern are processed.
        """
        run_rename(
            RenameMode.PATTERN, source, target,
            dry_run=dry_run, copy=copy, skip_duplicates=skip_duplicates,
            force=force, config=config, pattern=pattern, replacement=replacement,
        )

    @rename_app.command("date-pattern")
    def rename_date_pattern(
        source: SourceArg,
        target: TargetArg = None,
        pattern: Optional[str] = typer.Option(
            None, "--pattern", "-p",
            help="Pattern with date placeholders {Y} {y} {m} {d} {H} {i} {s}",
            show_default=default_show(_default_cfg.patterns.date_pattern),
        ),
        replacement: Optional[str] = typer.Option(
            None, "--replacement", "-r",
            help="Target layout using the same date placeholders",
            show_default=default_show(_default_cfg.patterns.date_replacement),
        ),
        dry_run: DryRunOpt = False,
        copy: CopyOpt = False,
        skip_duplicates: SkipDuplicatesOpt = False,
        force: ForceOpt = False,
        config: ConfigOpt = None,
    ):
        """
        Rearrange a date embedded in the filename.

        Example: --pattern "^{y}{m}{d}_(.+)$" --replacement "{Y}-{m}-{d}_"
        turns 240501_beach.jpg into 2024-05-01_beach.jpg.
        """
        run_rename(
            RenameMode.DATE_PATTERN, source, target,
            dry_run=dry_run, copy=copy, skip_duplicates=skip_duplicates,
            force=force, config=config, pattern=pattern, replacement=replacement,
        )

    @rename_app.command("exif-date")
    def rename_exif_date(
        source: SourceArg,
        target: TargetArg = None,
        target_filename_pattern: Optional[str] = typer.Option(
            None, "--target-filename-pattern", "-t",
            help="Date format of the new filename (Y-m-d_H-i-s or strftime %Y-%m-%d)",
            show_default=default_show(_default_cfg.patterns.exif_filename_pattern),
        ),
        dry_run: DryRunOpt = False,
        copy: CopyOpt = False,
        skip_duplicates: SkipDuplicatesOpt = False,
        force: ForceOpt = False,
        config: ConfigOpt = None,
    ):
        """
        Rename files after their EXIF capture date.

        Files sharing a name with a photo (e.g. the video of a Live Photo)
        get the same date and keep their own extension.
        """
        run_rename(
            RenameMode.EXIF_DATE, source, target,
            dry_run=dry_run, copy=copy, skip_duplicates=skip_duplicates,
            force=force, config=config, target_filename_pattern=target_filename_pattern,
        )

    @rename_app.command("hash")
    def rename_hash(
        source: SourceArg,
        target: TargetArg = None,
        algorithm: Optional[str] = typer.Option(
            None, "--algorithm",
            help=f"Hash algorithm ({', '.join(SUPPORTED_HASH_ALGORITHMS)})",
            show_default=default_show(_default_cfg.hashing.algorithm),
        ),
        dry_run: DryRunOpt = False,
        copy: CopyOpt = False,
        skip_duplicates: SkipDuplicatesOpt = False,
        force: ForceOpt = False,
        config: ConfigOpt = None,
    ):
        """
        Find byte-identical files across all directories.

        Every copy after the first gets the name of the first one with a
        duplicate suffix. Combine with --skip-duplicates to leave them behind.
        """
        run_rename(
            RenameMode.HASH, source, target,
            dry_run=dry_run, copy=copy, skip_duplicates=skip_duplicates,
            force=force, config=config, algorithm=algorithm,
        )

    @rename_app.command("filesize")
    def rename_filesize(
        source: SourceArg,
        target: TargetArg = None,
        dry_run: DryRunOpt = False,
        copy: CopyOpt = False,
        skip_duplicates: SkipDuplicatesOpt = False,
        force: ForceOpt = False,
        config: ConfigOpt = None,
    ):
        """
        Append the filesize to each filename.
        """
        run_rename(
            RenameMode.FILESIZE, source, target,
            dry_run=dry_run, copy=copy, skip_duplicates=skip_duplicates,
            force=force, config=config,
        )

    return rename_app
