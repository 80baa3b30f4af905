"""Configuration management for PhotoRenamer."""

from photorenamer.config.loader import ConfigLoader, ConfigurationError
from photorenamer.config.schema import PhotoRenamerConfig

__all__ = ["ConfigLoader", "ConfigurationError", "PhotoRenamerConfig"]
