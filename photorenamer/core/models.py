"""Data models for PhotoRenamer."""

import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from photorenamer.utils.constants import DUPLICATE_IDENTIFIER
from photorenamer.utils.path_utils import join_filename, split_filename


class TransferOutcome(Enum):
    """Outcome of a single rename pair."""

    PENDING = "pending"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    SKIPPED_DRY_RUN = "skipped_dry_run"
    TRANSFERRED = "transferred"
    FAILED_FATAL = "failed_fatal"


@dataclass(frozen=True)
class FileDescriptor:
    """
    Immutable view of one filesystem entry.

    Name parts and size are a snapshot taken at creation. Existence and
    writability are queried live on every call so collision resolution sees
    files created earlier in the same run.
    """

    path: Path
    size: Optional[int] = None

    @property
    def directory(self) -> Path:
        """Directory containing the entry."""
        return self.path.parent

    @property
    def filename(self) -> str:
        """Filename including extension."""
        return self.path.name

    @property
    def basename(self) -> str:
        """Filename without extension."""
        return split_filename(self.path.name)[0]

    @property
    def extension(self) -> str:
        """Extension without the leading dot, empty if there is none."""
        return split_filename(self.path.name)[1]

    @property
    def has_duplicate_identifier(self) -> bool:
        """True if the filename carries a disambiguation suffix."""
        return DUPLICATE_IDENTIFIER in self.filename

    def with_filename(self, filename: str) -> "FileDescriptor":
        """Descriptor for a sibling entry with another filename."""
        return FileDescriptor(path=self.directory / filename)

    def with_basename(self, basename: str) -> "FileDescriptor":
        """Descriptor for a sibling entry keeping this extension."""
        return self.with_filename(join_filename(basename, self.extension))

    def exists(self) -> bool:
        return self.path.exists()

    def is_file(self) -> bool:
        return self.path.is_file()

    def is_writable(self) -> bool:
        return os.access(self.path, os.W_OK)

    def __str__(self) -> str:
        return str(self.path)


@dataclass
class RenamePair:
    """A source file and the target it will be moved or copied to."""

    source: FileDescriptor
    target: FileDescriptor
    outcome: TransferOutcome = TransferOutcome.PENDING

    @property
    def is_noop(self) -> bool:
        """Source and target point to the same path."""
        return self.source.path == self.target.path

    @property
    def is_duplicate(self) -> bool:
        """Target filename carries a disambiguation suffix."""
        return self.target.has_duplicate_identifier


@dataclass
class DuplicateGroup:
    """Files sharing one duplicate key and their canonical target."""

    key: str
    target: FileDescriptor
    members: list[FileDescriptor] = field(default_factory=list)
    renames: list[RenamePair] = field(default_factory=list)

    def add_member(self, source: FileDescriptor) -> None:
        """Append a source file, keeping enumeration order."""
        self.members.append(source)


class DuplicateGroupCollection:
    """Insertion-ordered collection of duplicate groups keyed by duplicate key."""

    def __init__(self) -> None:
        self._groups: dict[str, DuplicateGroup] = {}

    def add(self, key: str, source: FileDescriptor, target: FileDescriptor) -> DuplicateGroup:
        """
        Add a source file to the group for key.

        The group is created on first sighting of the key and keeps the
        target computed for that first member as its canonical target.

        Args:
            key: Duplicate key
            source: Source file descriptor
            target: Target computed for the source

        Returns:
            The group the file was added to
        """
        group = self._groups.get(key)
        if group is None:
            group = DuplicateGroup(key=key, target=target)
            self._groups[key] = group
        group.add_member(source)
        return group

    def __iter__(self) -> Iterator[DuplicateGroup]:
        return iter(self._groups.values())

    def __len__(self) -> int:
        return len(self._groups)

    @property
    def total_members(self) -> int:
        """Number of source files across all groups."""
        return sum(len(group.members) for group in self._groups.values())

    @property
    def renames(self) -> list[RenamePair]:
        """All rename pairs in group-then-member order."""
        return [rename for group in self._groups.values() for rename in group.renames]


@dataclass
class TransferReport:
    """Result of executing the rename pairs of one run."""

    dry_run: bool = False
    copy: bool = False
    total_pairs: int = 0
    possible_duplicates: int = 0
    transferred: int = 0
    skipped_duplicates: int = 0
    would_transfer: int = 0

    outcomes: list[RenamePair] = field(default_factory=list)
    failed: Optional[tuple[RenamePair, str]] = None

    @property
    def processed(self) -> int:
        """Files transferred, or that would be transferred in a dry run."""
        return self.would_transfer if self.dry_run else self.transferred

    def record(self, pair: RenamePair, outcome: TransferOutcome) -> None:
        """Store the outcome of a pair and update the counters."""
        pair.outcome = outcome
        self.outcomes.append(pair)

        if outcome == TransferOutcome.TRANSFERRED:
            self.transferred += 1
        elif outcome == TransferOutcome.SKIPPED_DUPLICATE:
            self.skipped_duplicates += 1
        elif outcome == TransferOutcome.SKIPPED_DRY_RUN:
            self.would_transfer += 1
