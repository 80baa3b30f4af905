"""Grouping of source files by duplicate key."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Callable, Optional

from photorenamer.core.duplicate_identifier import DuplicateKeyStrategy
from photorenamer.core.models import DuplicateGroupCollection, FileDescriptor
from photorenamer.core.renamer import RenameStrategy, TargetFilenameError
from photorenamer.utils.path_utils import map_to_target

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[FileDescriptor, Exception], None]


class DuplicateGrouper:
    """
    Computes the target of every source file and groups files by duplicate key.

    Target path = target root / (source directory relative to source root)
    / target filename. The first file seen for a key fixes the canonical
    target of its group.
    """

    def __init__(
        self,
        source_root: Path,
        target_root: Path,
        name_strategy: RenameStrategy,
        key_strategy: DuplicateKeyStrategy,
        error_callback: Optional[ErrorCallback] = None,
    ):
        """
        Initialize the grouper.

        Args:
            source_root: Directory the files are enumerated from
            target_root: Directory the files are moved or copied into
            name_strategy: Computes the target filename
            key_strategy: Computes the duplicate key
            error_callback: Optional callback(source, error) for files whose
                            target could not be computed
        """
        self.source_root = Path(os.path.abspath(source_root))
        self.target_root = Path(os.path.abspath(target_root))
        self.name_strategy = name_strategy
        self.key_strategy = key_strategy
        self.error_callback = error_callback
        self.errors: list[tuple[FileDescriptor, Exception]] = []

    def target_path_for(self, source: FileDescriptor, filename: str) -> Path:
        """Target path of source when it gets filename."""
        return map_to_target(source.directory, self.source_root, self.target_root) / filename

    def target_for(self, source: FileDescriptor) -> Optional[FileDescriptor]:
        """
        Compute the canonical target of a source file.

        Returns:
            Target descriptor, or None if the file is to be left alone
        """
        try:
            filename = self.name_strategy.generate(source)
        except TargetFilenameError as e:
            logger.warning(f"{source}: {e}")
            self.errors.append((source, e))
            if self.error_callback:
                self.error_callback(source, e)
            return None

        if not filename:
            logger.debug(f"No target name, skipping: {source}")
            return None

        return FileDescriptor(path=self.target_path_for(source, filename))

    def group(
        self,
        files: Iterable[FileDescriptor],
        total: Optional[int] = None,
        progress_callback: Optional[Callable[[int, Optional[int]], None]] = None,
    ) -> DuplicateGroupCollection:
        """
        Group files by duplicate key.

        Args:
            files: Source files in enumeration order
            total: Number of files, passed through to the progress callback
            progress_callback: Optional callback(current, total) for progress updates

        Returns:
            Collection of duplicate groups in first-sighting order
        """
        collection = DuplicateGroupCollection()

        for i, source in enumerate(files, start=1):
            if progress_callback:
                progress_callback(i, total)

            target = self.target_for(source)
            if target is None:
                continue

            key = self.key_strategy.identify(source, target)
            if key is None:
                logger.debug(f"No duplicate key, skipping: {source}")
                continue

            collection.add(key, source, target)

        logger.info(
            f"Grouped {collection.total_members} files into {len(collection)} targets"
        )
        return collection
