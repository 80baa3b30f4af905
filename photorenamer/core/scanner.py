"""Directory enumeration for PhotoRenamer."""

import logging
import os
import re
from collections.abc import Iterator
from pathlib import Path
from typing import Callable, Optional, Union

from photorenamer.core.models import FileDescriptor

logger = logging.getLogger(__name__)

FileFilter = Callable[[Path], bool]


class EnumerationError(Exception):
    """A directory of the source tree could not be read."""

    pass


class RegexFilenameFilter:
    """Accepts files whose filename matches a regular expression."""

    def __init__(self, pattern: Union[str, re.Pattern]):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def __call__(self, path: Path) -> bool:
        return self.pattern.search(path.name) is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.pattern.pattern!r})"


class UppercaseFilenameFilter(RegexFilenameFilter):
    """Accepts files whose filename contains at least one uppercase letter."""

    def __init__(self) -> None:
        super().__init__(r"[A-Z]")


class FileEnumerator:
    """Lazily walks a directory tree and yields one descriptor per regular file."""

    def __init__(
        self,
        root: Path,
        file_filter: Optional[FileFilter] = None,
        ignore_hidden: bool = False,
    ):
        """
        Initialize the enumerator.

        Args:
            root: Directory to walk
            file_filter: Optional predicate on the file path. Directories are
                         always descended into, files are yielded only if
                         the predicate accepts them.
            ignore_hidden: Skip files and directories starting with a dot
        """
        self.root = Path(os.path.abspath(root))
        self.file_filter = file_filter
        self.ignore_hidden = ignore_hidden

    def __iter__(self) -> Iterator[FileDescriptor]:
        if not self.root.exists():
            raise FileNotFoundError(f"Source path not found: {self.root}")

        if not self.root.is_dir():
            raise NotADirectoryError(f"Source path is not a directory: {self.root}")

        yield from self._walk(self.root)

    def _walk(self, directory: Path) -> Iterator[FileDescriptor]:
        """
        Depth-first walk of one directory.

        Entries are visited in name order so numbering is stable between
        runs and platforms.
        """
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise EnumerationError(f"Cannot read directory {directory}: {e}") from e

        for entry in entries:
            if self.ignore_hidden and entry.name.startswith("."):
                continue

            path = Path(entry.path)

            if entry.is_dir(follow_symlinks=False):
                yield from self._walk(path)
                continue

            if not entry.is_file():
                continue

            if self.file_filter is not None and not self.file_filter(path):
                logger.debug(f"Filtered out: {path}")
                continue

            yield FileDescriptor(path=path, size=entry.stat().st_size)

    def count(self) -> int:
        """Number of files the enumerator yields."""
        return sum(1 for _ in self)
