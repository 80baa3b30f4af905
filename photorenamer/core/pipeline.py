"""Wiring of the rename passes for each rename mode.

Every mode is a fixed combination of a name strategy, a duplicate key
strategy and an optional enumeration filter:

    lower        LowerCase   target pathname  files with an uppercase letter
    pattern      Pattern     target pathname  files matching the pattern
    date-pattern DatePattern target pathname  files matching the pattern
    exif-date    ExifDate    target filename  all files, own extensions kept
    hash         Inherit     content hash     all files
    filesize     Filesize    target pathname  all files
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from photorenamer.core.collision_resolver import CollisionResolver
from photorenamer.core.duplicate_identifier import (
    ContentHashStrategy,
    DuplicateKeyStrategy,
    TargetFilenameStrategy,
    TargetPathnameStrategy,
)
from photorenamer.core.exif_reader import ExifCapture
from photorenamer.core.file_operations import FileTransferExecutor
from photorenamer.core.grouper import DuplicateGrouper, ErrorCallback
from photorenamer.core.hashing import DEFAULT_CHUNK_SIZE
from photorenamer.core.models import DuplicateGroupCollection, TransferReport
from photorenamer.core.renamer import (
    DatePatternFilenameStrategy,
    ExifDateFilenameStrategy,
    FilesizeFilenameStrategy,
    InheritFilenameStrategy,
    LowerCaseFilenameStrategy,
    PatternFilenameStrategy,
    RenameStrategy,
)
from photorenamer.core.scanner import (
    FileEnumerator,
    FileFilter,
    RegexFilenameFilter,
    UppercaseFilenameFilter,
)
from photorenamer.utils.constants import (
    DEFAULT_DATE_PATTERN,
    DEFAULT_DATE_REPLACEMENT,
    DEFAULT_EXIF_FILENAME_PATTERN,
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_PATTERN,
    DEFAULT_REPLACEMENT,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, Optional[int]], None]


class RenameMode(Enum):
    """Available rename modes."""

    LOWER = "lower"
    PATTERN = "pattern"
    DATE_PATTERN = "date-pattern"
    EXIF_DATE = "exif-date"
    HASH = "hash"
    FILESIZE = "filesize"


class RenamePipeline:
    """Runs enumeration, grouping, collision resolution and transfer in order."""

    def __init__(
        self,
        source_root: Path,
        target_root: Optional[Path],
        name_strategy: RenameStrategy,
        key_strategy: DuplicateKeyStrategy,
        file_filter: Optional[FileFilter] = None,
        use_source_extension: bool = False,
        ignore_hidden: bool = False,
        error_callback: Optional[ErrorCallback] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            source_root: Directory to rename files in
            target_root: Directory to move or copy files to (None: source_root)
            name_strategy: Computes target filenames
            key_strategy: Computes duplicate keys
            file_filter: Optional enumeration filter
            use_source_extension: Keep every file's own extension
            ignore_hidden: Skip hidden files and directories
            error_callback: Optional callback(source, error) for skipped files
        """
        self.source_root = Path(os.path.abspath(source_root))
        self.target_root = Path(os.path.abspath(target_root)) if target_root else self.source_root
        self.name_strategy = name_strategy
        self.key_strategy = key_strategy
        self.file_filter = file_filter
        self.use_source_extension = use_source_extension

        self.enumerator = FileEnumerator(
            self.source_root,
            file_filter=file_filter,
            ignore_hidden=ignore_hidden,
        )
        self.grouper = DuplicateGrouper(
            self.source_root,
            self.target_root,
            name_strategy,
            key_strategy,
            error_callback=error_callback,
        )
        self.resolver = CollisionResolver(
            self.source_root,
            self.target_root,
            use_source_extension=use_source_extension,
        )

    def plan(self, progress_callback: Optional[ProgressCallback] = None) -> DuplicateGroupCollection:
        """
        Compute the resolved rename pairs without touching any file.

        Raises:
            EnumerationError: If a directory of the source tree cannot be read
        """
        total = self.enumerator.count() if progress_callback else None
        collection = self.grouper.group(self.enumerator, total, progress_callback)
        return self.resolver.resolve(collection)

    def execute(
        self,
        collection: DuplicateGroupCollection,
        executor: FileTransferExecutor,
    ) -> TransferReport:
        """
        Transfer the resolved pairs.

        Raises:
            FatalTransferError: If the transfer pass had to stop
        """
        return executor.execute(collection)


def create_pipeline(
    mode: RenameMode,
    source_root: Path,
    target_root: Optional[Path] = None,
    pattern: Optional[str] = None,
    replacement: Optional[str] = None,
    target_filename_pattern: Optional[str] = None,
    algorithm: str = DEFAULT_HASH_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    ignore_hidden: bool = False,
    exif_reader: Optional[Callable[[Path], Optional[ExifCapture]]] = None,
    error_callback: Optional[ErrorCallback] = None,
) -> RenamePipeline:
    """
    Build the pipeline for a rename mode.

    Args:
        mode: Rename mode
        source_root: Directory to rename files in
        target_root: Directory to move or copy files to (None: source_root)
        pattern: Search pattern (pattern and date-pattern modes)
        replacement: Replacement (pattern and date-pattern modes)
        target_filename_pattern: Date format (exif-date mode)
        algorithm: Hash algorithm (hash mode)
        chunk_size: Hash read size (hash mode)
        ignore_hidden: Skip hidden files and directories
        exif_reader: Optional EXIF collaborator (exif-date mode)
        error_callback: Optional callback(source, error) for skipped files

    Returns:
        Configured RenamePipeline

    Raises:
        PatternCompilationError: If a search pattern is malformed
        ValueError: If the hash algorithm is not supported
    """
    name_strategy: RenameStrategy
    key_strategy: DuplicateKeyStrategy = TargetPathnameStrategy()
    file_filter: Optional[FileFilter] = None
    use_source_extension = False

    if mode == RenameMode.LOWER:
        name_strategy = LowerCaseFilenameStrategy()
        file_filter = UppercaseFilenameFilter()

    elif mode == RenameMode.PATTERN:
        strategy = PatternFilenameStrategy(
            pattern or DEFAULT_PATTERN,
            DEFAULT_REPLACEMENT if replacement is None else replacement,
        )
        name_strategy = strategy
        file_filter = RegexFilenameFilter(strategy.regex)

    elif mode == RenameMode.DATE_PATTERN:
        date_strategy = DatePatternFilenameStrategy(
            pattern or DEFAULT_DATE_PATTERN,
            DEFAULT_DATE_REPLACEMENT if replacement is None else replacement,
        )
        name_strategy = date_strategy
        file_filter = RegexFilenameFilter(date_strategy.regex)

    elif mode == RenameMode.EXIF_DATE:
        name_strategy = ExifDateFilenameStrategy(
            target_filename_pattern or DEFAULT_EXIF_FILENAME_PATTERN,
            exif_reader=exif_reader,
            ignore_hidden=ignore_hidden,
        )
        key_strategy = TargetFilenameStrategy()
        use_source_extension = True

    elif mode == RenameMode.HASH:
        name_strategy = InheritFilenameStrategy()
        key_strategy = ContentHashStrategy(algorithm, chunk_size)

    elif mode == RenameMode.FILESIZE:
        name_strategy = FilesizeFilenameStrategy()

    else:
        raise ValueError(f"Unknown rename mode: {mode}")

    logger.debug(
        f"Pipeline {mode.value}: {type(name_strategy).__name__}, "
        f"{type(key_strategy).__name__}, filter={file_filter!r}"
    )

    return RenamePipeline(
        source_root,
        target_root,
        name_strategy,
        key_strategy,
        file_filter=file_filter,
        use_source_extension=use_source_extension,
        ignore_hidden=ignore_hidden,
        error_callback=error_callback,
    )
