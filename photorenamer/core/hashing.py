"""Hash computation utilities for PhotoRenamer.

Provides streamed hashing to avoid loading large files into memory. The
default is the 128-bit xxHash, which is fast enough to key every file of a
photo library by content.
"""

import hashlib
import logging
from pathlib import Path
from typing import Any, Optional

import xxhash

from photorenamer.utils.constants import DEFAULT_HASH_ALGORITHM, SUPPORTED_HASH_ALGORITHMS

logger = logging.getLogger(__name__)

# Default chunk size for streaming hash computation (64KB)
DEFAULT_CHUNK_SIZE = 65536


def create_hasher(algorithm: str = DEFAULT_HASH_ALGORITHM) -> Any:
    """Create a hash object for the given algorithm.

    Args:
        algorithm: One of 'xxh128', 'xxh64', 'sha256', 'md5'.

    Returns:
        Object with update() and hexdigest().

    Raises:
        ValueError: If algorithm is not supported.
    """
    if algorithm == "xxh128":
        return xxhash.xxh3_128()
    if algorithm == "xxh64":
        return xxhash.xxh64()
    if algorithm in ("sha256", "md5"):
        return hashlib.new(algorithm)
    raise ValueError(
        f"Unsupported hash algorithm: {algorithm}. "
        f"Use one of: {', '.join(SUPPORTED_HASH_ALGORITHMS)}."
    )


def compute_file_hash(
    file_path: Path,
    algorithm: str = DEFAULT_HASH_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Optional[str]:
    """Compute hash of a file using streamed reading.

    Args:
        file_path: Path to the file to hash.
        algorithm: Hash algorithm to use.
        chunk_size: Size of chunks to read at a time.

    Returns:
        Hexadecimal hash string, or None if file cannot be read.

    Raises:
        ValueError: If algorithm is not supported.
    """
    hasher = create_hasher(algorithm)

    try:
        with open(file_path, "rb") as f:
            while chunk := f.read(chunk_size):
                hasher.update(chunk)

        return hasher.hexdigest()

    except FileNotFoundError:
        logger.debug(f"File not found for hashing: {file_path}")
        return None
    except PermissionError:
        logger.warning(f"Permission denied reading file for hash: {file_path}")
        return None
    except OSError as e:
        logger.warning(f"OS error hashing file {file_path}: {e}")
        return None
