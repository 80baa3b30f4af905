"""Main CLI application for PhotoRenamer.

This module serves as the orchestrator that registers all CLI commands.
Individual commands are implemented in separate modules for maintainability.
"""

import typer

from photorenamer.utils.logging import setup_logging

# Import command registration functions
from photorenamer.cli.version_cmd import register_version
from photorenamer.cli.config_cmd import create_config_app
from photorenamer.cli.rename_cmd import create_rename_app


# Create main app
app = typer.Typer(
    name="photorenamer",
    help="PhotoRenamer: rename photo collections and resolve duplicate names.",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """PhotoRenamer: rename photo collections and resolve duplicate names."""
    log_level = "DEBUG" if verbose else "INFO"
    setup_logging(level=log_level)


# Register top-level commands
register_version(app)

# Add sub-apps
app.add_typer(create_rename_app(), name="rename")
app.add_typer(create_config_app(), name="config")


if __name__ == "__main__":
    app()
