"""Shared CLI option definitions."""

from pathlib import Path
from typing import Annotated, Optional

import typer

SourceArg = Annotated[
    Path,
    typer.Argument(help="Directory containing the files to rename"),
]
TargetArg = Annotated[
    Optional[Path],
    typer.Argument(help="Directory to move or copy the files to (default: source directory)"),
]
DryRunOpt = Annotated[
    bool,
    typer.Option("--dry-run", "-d", help="Show what would be done without touching any file"),
]
CopyOpt = Annotated[
    bool,
    typer.Option("--copy", "-c", help="Copy files instead of moving them (requires TARGET)"),
]
SkipDuplicatesOpt = Annotated[
    bool,
    typer.Option(
        "--skip-duplicates",
        "-s",
        help="Leave files that would get a duplicate suffix untouched (requires TARGET)",
    ),
]
ForceOpt = Annotated[
    bool,
    typer.Option("--force", "-f", help="Skip confirmation"),
]
ConfigOpt = Annotated[
    Optional[Path],
    typer.Option("--config", help="Config file path"),
]
