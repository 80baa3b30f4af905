"""Version command for PhotoRenamer CLI."""

import typer

from photorenamer import __version__
from photorenamer.cli._common import console


def register_version(app: typer.Typer) -> None:
    """Register the version command with the Typer app."""

    @app.command()
    def version():
        """Show PhotoRenamer version."""
        console.print(f"PhotoRenamer v{__version__}")
