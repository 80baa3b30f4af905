"""Configuration loading and validation for PhotoRenamer."""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from photorenamer.config.schema import (
    GeneralConfig,
    HashingConfig,
    LoggingConfig,
    PatternsConfig,
    PhotoRenamerConfig,
    TransferConfig,
)
from photorenamer.utils.constants import SUPPORTED_HASH_ALGORITHMS

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Configuration error."""

    pass


class ConfigLoader:
    """Loads configuration from YAML files."""

    DEFAULT_CONFIG_PATHS = [
        Path("photorenamer.yaml"),
        Path("photorenamer.yml"),
        Path(".photorenamer/config.yaml"),
        Path(".photorenamer/config.yml"),
    ]

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> PhotoRenamerConfig:
        """
        Load configuration.

        Priority:
        1. Explicit config_path argument
        2. Default config paths (first found)
        3. Built-in defaults

        Args:
            config_path: Optional explicit path to config file

        Returns:
            PhotoRenamerConfig object

        Raises:
            ConfigurationError: If config file cannot be read or parsed
        """
        if config_path and not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        path = config_path or cls.find_config_file()
        if path is None:
            return cls._build_config({})

        logger.debug(f"Loading config from {path}")
        return cls._build_config(cls._load_yaml(path))

    @classmethod
    def find_config_file(cls) -> Optional[Path]:
        """First existing default config file, None if there is none."""
        return next((path for path in cls.DEFAULT_CONFIG_PATHS if path.exists()), None)

    @classmethod
    def _load_yaml(cls, path: Path) -> dict[str, Any]:
        """Load YAML file and return dict."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Cannot read {path}: {e}")

        if not data:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Invalid config in {path}: expected a mapping")
        return data

    @classmethod
    def _build_config(cls, data: dict[str, Any]) -> PhotoRenamerConfig:
        """Build PhotoRenamerConfig from dictionary."""
        return PhotoRenamerConfig(
            version=str(data.get("version", "1.0")),
            general=cls._build_general(data.get("general") or {}),
            patterns=cls._build_patterns(data.get("patterns") or {}),
            hashing=cls._build_hashing(data.get("hashing") or {}),
            transfer=cls._build_transfer(data.get("transfer") or {}),
            logging=cls._build_logging(data.get("logging") or {}),
        )

    @classmethod
    def _build_general(cls, data: dict[str, Any]) -> GeneralConfig:
        """Build GeneralConfig from dictionary."""
        config = GeneralConfig()
        if "ignore_hidden_files" in data:
            config.ignore_hidden_files = bool(data["ignore_hidden_files"])
        if "confirm" in data:
            config.confirm = bool(data["confirm"])
        return config

    @classmethod
    def _build_patterns(cls, data: dict[str, Any]) -> PatternsConfig:
        """Build PatternsConfig from dictionary."""
        config = PatternsConfig()
        for name in (
            "pattern",
            "replacement",
            "date_pattern",
            "date_replacement",
            "exif_filename_pattern",
        ):
            if name in data and data[name] is not None:
                setattr(config, name, str(data[name]))
        return config

    @classmethod
    def _build_hashing(cls, data: dict[str, Any]) -> HashingConfig:
        """Build HashingConfig from dictionary."""
        config = HashingConfig()
        if "algorithm" in data:
            config.algorithm = str(data["algorithm"]).lower()
        if "chunk_size" in data:
            config.chunk_size = int(data["chunk_size"])
        return config

    @classmethod
    def _build_transfer(cls, data: dict[str, Any]) -> TransferConfig:
        """Build TransferConfig from dictionary."""
        config = TransferConfig()
        if "preserve_metadata" in data:
            config.preserve_metadata = bool(data["preserve_metadata"])
        return config

    @classmethod
    def _build_logging(cls, data: dict[str, Any]) -> LoggingConfig:
        """Build LoggingConfig from dictionary."""
        config = LoggingConfig()
        if "level" in data:
            config.level = data["level"]
        if "color_output" in data:
            config.color_output = bool(data["color_output"])
        if "log_to_file" in data:
            config.log_to_file = bool(data["log_to_file"])
        if "file_path" in data:
            config.file_path = data["file_path"]
        return config

    @classmethod
    def validate(cls, config: PhotoRenamerConfig) -> list[str]:
        """
        Validate configuration and return list of errors.

        Args:
            config: Configuration to validate

        Returns:
            List of error messages (empty if valid)
        """
        errors: list[str] = []

        if config.hashing.algorithm not in SUPPORTED_HASH_ALGORITHMS:
            errors.append(
                f"Invalid hashing algorithm: {config.hashing.algorithm}. "
                f"Must be one of: {list(SUPPORTED_HASH_ALGORITHMS)}"
            )

        if config.hashing.chunk_size < 1:
            errors.append("chunk_size must be at least 1")

        valid_levels = ["debug", "info", "warning", "error", "critical"]
        if str(config.logging.level).lower() not in valid_levels:
            errors.append(f"Invalid logging level: {config.logging.level}")

        if not config.patterns.exif_filename_pattern:
            errors.append("exif_filename_pattern must not be empty")

        return errors


def validate_run_options(
    target: Optional[Path],
    copy: bool = False,
    skip_duplicates: bool = False,
) -> None:
    """
    Check the option combination of a rename run before any file is touched.

    Copying into the source tree or leaving duplicates behind in it makes no
    sense, so both need an explicit target directory.

    Raises:
        ConfigurationError: If the combination is invalid
    """
    if copy and target is None:
        raise ConfigurationError(
            "The --copy option requires a target directory. "
            "Please provide TARGET to copy files into."
        )

    if skip_duplicates and target is None:
        raise ConfigurationError(
            "The --skip-duplicates option requires a target directory. "
            "Please provide TARGET so duplicates can be left in the source."
        )


def require_replacement(replacement: Optional[str], option: str = "--replacement") -> str:
    """
    Return replacement, failing if it is missing.

    Raises:
        ConfigurationError: If no replacement was given
    """
    if replacement is None or replacement == "":
        raise ConfigurationError(f"Missing replacement value. Please provide {option}.")
    return replacement
