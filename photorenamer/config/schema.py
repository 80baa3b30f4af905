"""Configuration schema definitions for PhotoRenamer."""

from dataclasses import dataclass, field

from photorenamer.core.hashing import DEFAULT_CHUNK_SIZE
from photorenamer.utils.constants import (
    DEFAULT_DATE_PATTERN,
    DEFAULT_DATE_REPLACEMENT,
    DEFAULT_EXIF_FILENAME_PATTERN,
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_PATTERN,
    DEFAULT_REPLACEMENT,
)


@dataclass
class GeneralConfig:
    """General configuration settings."""

    ignore_hidden_files: bool = False
    confirm: bool = True


@dataclass
class PatternsConfig:
    """Default patterns per rename mode."""

    pattern: str = DEFAULT_PATTERN
    replacement: str = DEFAULT_REPLACEMENT
    date_pattern: str = DEFAULT_DATE_PATTERN
    date_replacement: str = DEFAULT_DATE_REPLACEMENT
    exif_filename_pattern: str = DEFAULT_EXIF_FILENAME_PATTERN


@dataclass
class HashingConfig:
    """Content hashing settings."""

    algorithm: str = DEFAULT_HASH_ALGORITHM
    chunk_size: int = DEFAULT_CHUNK_SIZE


@dataclass
class TransferConfig:
    """File transfer settings."""

    preserve_metadata: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration settings."""

    level: str = "info"
    color_output: bool = True
    log_to_file: bool = False
    file_path: str = ".photorenamer/photorenamer.log"


@dataclass
class PhotoRenamerConfig:
    """Root configuration object for PhotoRenamer."""

    version: str = "1.0"
    general: GeneralConfig = field(default_factory=GeneralConfig)
    patterns: PatternsConfig = field(default_factory=PatternsConfig)
    hashing: HashingConfig = field(default_factory=HashingConfig)
    transfer: TransferConfig = field(default_factory=TransferConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
