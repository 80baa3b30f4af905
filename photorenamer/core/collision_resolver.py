"""Collision resolution: turns duplicate groups into non-colliding rename pairs."""

import itertools
import logging
import os
from collections.abc import Iterator
from pathlib import Path

from photorenamer.core.models import (
    DuplicateGroup,
    DuplicateGroupCollection,
    FileDescriptor,
    RenamePair,
)
from photorenamer.core.renamer import add_duplicate_identifier
from photorenamer.utils.path_utils import join_filename, map_to_target

logger = logging.getLogger(__name__)


class CollisionResolver:
    """
    Assigns every group member a target that collides with nothing.

    Within a group at most one member keeps the canonical name, every other
    member gets "-duplicate-NNN" with a counter shared by the group. A
    target is taken if it exists on disk or was handed out earlier in the
    same batch.
    """

    def __init__(
        self,
        source_root: Path,
        target_root: Path,
        use_source_extension: bool = False,
    ):
        """
        Initialize the resolver.

        Args:
            source_root: Directory the files are enumerated from
            target_root: Directory the files are moved or copied into
            use_source_extension: Give every member its own extension instead
                                  of the extension of the canonical target
        """
        self.source_root = Path(os.path.abspath(source_root))
        self.target_root = Path(os.path.abspath(target_root))
        self.use_source_extension = use_source_extension
        self._claimed: set[Path] = set()

    def resolve(self, collection: DuplicateGroupCollection) -> DuplicateGroupCollection:
        """
        Fill the rename pairs of every group, in first-sighting order.

        Args:
            collection: Groups built by the grouper

        Returns:
            The same collection with renames filled in
        """
        self._claimed = set()

        for group in collection:
            self.resolve_group(group)

        logger.info(f"Resolved {len(collection.renames)} renames")
        return collection

    def pairs_for(self, group: DuplicateGroup) -> list[RenamePair]:
        """One pair per member, all pointing at the canonical name."""
        canonical = group.target
        pairs = []

        for member in group.members:
            extension = member.extension if self.use_source_extension else canonical.extension
            directory = map_to_target(member.directory, self.source_root, self.target_root)
            target = FileDescriptor(path=directory / join_filename(canonical.basename, extension))
            pairs.append(RenamePair(source=member, target=target))

        return pairs

    def resolve_group(self, group: DuplicateGroup) -> None:
        """Compute the final targets of one group."""
        pairs = self.pairs_for(group)
        renames = [pair for pair in pairs if not pair.is_noop]

        # A member already carrying the canonical name keeps it
        canonical_held = len(renames) < len(pairs)
        for pair in pairs:
            if pair.is_noop:
                self._claimed.add(pair.target.path)

        counter = itertools.count(1)

        for index, pair in enumerate(renames):
            keeps_canonical = index == 0 and not canonical_held and not self._is_taken(pair.target)

            if not keeps_canonical:
                pair.target = self._next_free_target(pair, counter)

            self._claimed.add(pair.target.path)

            if pair.is_duplicate:
                logger.debug(f"Collision: {pair.source} → {pair.target.filename}")

        # A suffixed candidate may turn out to be the name the file already has
        group.renames = [pair for pair in renames if not pair.is_noop]

    def _is_taken(self, target: FileDescriptor) -> bool:
        return target.path in self._claimed or target.exists()

    def _next_free_target(self, pair: RenamePair, counter: Iterator[int]) -> FileDescriptor:
        """Allocate suffixes until a free target (or the source itself) is found."""
        basename = pair.target.basename

        while True:
            candidate = pair.target.with_basename(add_duplicate_identifier(basename, next(counter)))
            if candidate.path == pair.source.path or not self._is_taken(candidate):
                return candidate
