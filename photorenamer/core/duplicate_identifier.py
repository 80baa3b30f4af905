"""Duplicate key strategies.

A duplicate key decides which source files compete for the same target.
Files sharing a key end up in one duplicate group.
"""

import logging
from pathlib import Path
from typing import Optional, Protocol

from photorenamer.core.hashing import DEFAULT_CHUNK_SIZE, compute_file_hash, create_hasher
from photorenamer.core.models import FileDescriptor
from photorenamer.utils.constants import DEFAULT_HASH_ALGORITHM

logger = logging.getLogger(__name__)


class DuplicateKeyStrategy(Protocol):
    """Computes the duplicate key of a source file and its target."""

    def identify(self, source: FileDescriptor, target: FileDescriptor) -> Optional[str]:
        ...


class TargetPathnameStrategy:
    """Files compete only when they end up at the same path."""

    def identify(self, source: FileDescriptor, target: FileDescriptor) -> Optional[str]:
        return str(target.path)


class TargetFilenameStrategy:
    """Files compete when they get the same filename, in any directory."""

    def identify(self, source: FileDescriptor, target: FileDescriptor) -> Optional[str]:
        return target.filename


class ContentHashStrategy:
    """
    Files compete when their content is byte-identical.

    Uses the 128-bit xxHash by default. Files that cannot be read are
    skipped.
    """

    def __init__(
        self,
        algorithm: str = DEFAULT_HASH_ALGORITHM,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """
        Initialize the strategy.

        Args:
            algorithm: Hash algorithm ('xxh128', 'xxh64', 'sha256' or 'md5')
            chunk_size: Bytes read per chunk

        Raises:
            ValueError: If the algorithm is not supported
        """
        # Fail on an unknown algorithm before the first file is read
        create_hasher(algorithm)
        self.algorithm = algorithm
        self.chunk_size = chunk_size
        self._hash_cache: dict[Path, Optional[str]] = {}

    def identify(self, source: FileDescriptor, target: FileDescriptor) -> Optional[str]:
        if source.path in self._hash_cache:
            return self._hash_cache[source.path]

        file_hash = compute_file_hash(source.path, self.algorithm, self.chunk_size)
        if file_hash is None:
            logger.debug(f"Skipping unreadable file: {source}")

        self._hash_cache[source.path] = file_hash
        return file_hash
