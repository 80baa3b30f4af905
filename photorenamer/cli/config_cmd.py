"""Config commands for PhotoRenamer CLI."""

from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from rich.markup import escape
from rich.table import Table

from photorenamer.cli._common import console
from photorenamer.cli.helpers import error_exit
from photorenamer.cli.options import ConfigOpt
from photorenamer.config import ConfigLoader, ConfigurationError, PhotoRenamerConfig

CONFIG_HEADER = (
    "# PhotoRenamer configuration\n"
    "# Command line options override the values below.\n\n"
)


def _settings_table(sections: dict[str, Any]) -> Table:
    table = Table(title="Effective Configuration")
    table.add_column("Section", style="cyan")
    table.add_column("Setting")
    table.add_column("Value", style="green")

    for name, values in sections.items():
        if not isinstance(values, dict):
            table.add_row(name, "", escape(str(values)))
            continue
        for i, (key, value) in enumerate(values.items()):
            table.add_row(name if i == 0 else "", key, escape(str(value)))

    return table


def create_config_app() -> typer.Typer:
    """Create and return the config sub-app with all commands registered."""

    config_app = typer.Typer(
        name="config",
        help="Inspect and create PhotoRenamer configuration files.",
        no_args_is_help=True,
    )

    @config_app.command("init")
    def config_init(
        output: Path = typer.Option(
            ConfigLoader.DEFAULT_CONFIG_PATHS[0],
            "--output", "-o",
            help="Where to write the config file",
        ),
        force: bool = typer.Option(
            False,
            "--force", "-f",
            help="Replace an existing file",
        ),
    ):
        """
        Write the built-in defaults to a YAML config file.
        """
        output = output.resolve()

        if output.exists() and not force:
            console.print(f"[yellow]Refusing to overwrite existing file:[/yellow] {output}")
            console.print("Pass --force to replace it.")
            raise typer.Exit(1)

        defaults = asdict(PhotoRenamerConfig())
        content = CONFIG_HEADER + yaml.safe_dump(defaults, default_flow_style=False, sort_keys=False)

        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(content, encoding="utf-8")
        except OSError as e:
            error_exit(console, f"Cannot write {output}: {e}")

        console.print(f"[green]Created config file:[/green] {output}")

    @config_app.command("show")
    def config_show(
        config: ConfigOpt = None,
        section: Optional[str] = typer.Option(
            None,
            "--section", "-s",
            help="Limit output to one section (general, patterns, hashing, transfer, logging)",
        ),
    ):
        """
        Show the effective configuration.

        Values come from the config file in use, with built-in defaults for
        everything the file leaves out.
        """
        try:
            cfg = ConfigLoader.load(config)
        except ConfigurationError as e:
            error_exit(console, str(e))

        sections = asdict(cfg)
        if section:
            if section not in sections:
                console.print(f"[red]Unknown section:[/red] {section}")
                console.print(f"Choose one of: {', '.join(sections)}")
                raise typer.Exit(1)
            sections = {section: sections[section]}

        origin = config or ConfigLoader.find_config_file()
        console.print(f"[dim]Loaded from: {origin or 'built-in defaults'}[/dim]")
        console.print(_settings_table(sections))

        errors = ConfigLoader.validate(cfg)
        for error in errors:
            console.print(f"[red]Invalid:[/red] {error}")
        if errors:
            raise typer.Exit(1)

    @config_app.command("path")
    def config_path():
        """
        List the config file locations in lookup order.
        """
        active = ConfigLoader.find_config_file()

        table = Table(title="Config Lookup Order")
        table.add_column("#", justify="right")
        table.add_column("Path", style="cyan")
        table.add_column("Status")

        for i, search_path in enumerate(ConfigLoader.DEFAULT_CONFIG_PATHS, 1):
            if search_path == active:
                status = "[green]ACTIVE[/green]"
            elif search_path.exists():
                status = "[yellow]shadowed[/yellow]"
            else:
                status = "[dim]missing[/dim]"
            table.add_row(str(i), str(search_path), status)

        console.print(table)

        if active is None:
            console.print("[dim]Using built-in defaults.[/dim] Create a file with 'photorenamer config init'.")

    return config_app
