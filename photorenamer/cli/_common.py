"""Shared state and utilities for CLI commands.

This module centralizes common CLI dependencies to support
the modular command structure (rename_cmd, config_cmd, etc.).
"""

from rich.console import Console

from photorenamer.config import ConfigLoader


# Initialize console (shared across all commands)
console = Console()

# Load config at module level to generate dynamic help text
# This allows --help to show actual defaults from config (or built-in if no config)
_default_cfg = ConfigLoader.load(None)
_has_config_file = ConfigLoader.find_config_file() is not None
_cfg_note = " via config" if _has_config_file else ""


def default_show(value: str) -> str:
    """Generate show_default string for an option whose default may come from config.

    Args:
        value: The effective default

    Returns:
        String like "Y-m-d_H-i-s via config" or "Y-m-d_H-i-s"
    """
    return f"{value}{_cfg_note}"
