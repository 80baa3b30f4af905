"""Transfer of resolved rename pairs to the filesystem."""

import logging
import shutil
from pathlib import Path
from typing import Callable, Optional

from photorenamer.core.models import (
    DuplicateGroupCollection,
    RenamePair,
    TransferOutcome,
    TransferReport,
)

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[RenamePair, TransferOutcome], None]


class FatalTransferError(Exception):
    """A transfer failed in a way that aborts the remaining batch."""

    def __init__(self, message: str, pair: Optional[RenamePair] = None):
        super().__init__(message)
        self.pair = pair
        self.report: Optional[TransferReport] = None


def ensure_directory(path: Path) -> None:
    """
    Create a directory and its parents.

    Creation may race with another process, so the result is checked again
    after mkdir instead of trusting its outcome.

    Raises:
        FatalTransferError: If the path is not a directory afterwards
    """
    if path.is_dir():
        return

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create directory {path}: {e}")

    if not path.is_dir():
        raise FatalTransferError(f'Directory "{path}" was not created')


class FileTransferExecutor:
    """
    Moves or copies files to their resolved targets.

    Pairs are processed in group-then-member order. Each pair ends in
    exactly one outcome. A fatal error stops the pass; files transferred
    before it stay where they are.
    """

    def __init__(
        self,
        dry_run: bool = False,
        copy: bool = False,
        skip_duplicates: bool = False,
        preserve_metadata: bool = True,
        outcome_callback: Optional[OutcomeCallback] = None,
    ):
        """
        Initialize the executor.

        Args:
            dry_run: If True, only report what would be transferred
            copy: Copy files instead of moving them
            skip_duplicates: Leave files with a suffixed target untouched
            preserve_metadata: Keep timestamps and permission bits when copying
            outcome_callback: Optional callback(pair, outcome) after each pair
        """
        self.dry_run = dry_run
        self.copy = copy
        self.skip_duplicates = skip_duplicates
        self.preserve_metadata = preserve_metadata
        self.outcome_callback = outcome_callback

    def execute(self, collection: DuplicateGroupCollection) -> TransferReport:
        """
        Transfer all rename pairs of a collection.

        Args:
            collection: Resolved duplicate groups

        Returns:
            TransferReport with the outcome of every processed pair

        Raises:
            FatalTransferError: If a directory cannot be created, a target is
                                not writable or the transfer itself fails.
                                The report built so far is attached as
                                ``report`` on the exception.
        """
        renames = collection.renames
        report = TransferReport(
            dry_run=self.dry_run,
            copy=self.copy,
            total_pairs=len(renames),
        )

        for pair in renames:
            if pair.is_duplicate:
                report.possible_duplicates += 1

            try:
                outcome = self.transfer(pair)
            except FatalTransferError as e:
                e.pair = pair
                report.record(pair, TransferOutcome.FAILED_FATAL)
                report.failed = (pair, str(e))
                self._notify(pair, TransferOutcome.FAILED_FATAL)
                e.report = report
                raise

            report.record(pair, outcome)
            self._notify(pair, outcome)

        return report

    def transfer(self, pair: RenamePair) -> TransferOutcome:
        """
        Transfer a single pair.

        Returns:
            Outcome of the pair

        Raises:
            FatalTransferError: If the transfer cannot be done
        """
        if self.skip_duplicates and pair.is_duplicate:
            logger.debug(f"Skipping duplicate: {pair.source}")
            return TransferOutcome.SKIPPED_DUPLICATE

        action = "copy" if self.copy else "move"

        if self.dry_run:
            logger.info(f"[DRY RUN] Would {action}: {pair.source} -> {pair.target}")
            return TransferOutcome.SKIPPED_DRY_RUN

        ensure_directory(pair.target.directory)

        if not pair.source.is_file():
            raise FatalTransferError(f'Source file "{pair.source}" is not a regular file')

        if pair.target.is_file() and not pair.target.is_writable():
            raise FatalTransferError(f'Target file "{pair.target}" is not writeable')

        try:
            if self.copy:
                if self.preserve_metadata:
                    shutil.copy2(str(pair.source.path), str(pair.target.path))
                else:
                    shutil.copy(str(pair.source.path), str(pair.target.path))
            else:
                shutil.move(str(pair.source.path), str(pair.target.path))
        except OSError as e:
            logger.error(f"Failed to {action} {pair.source}: {e}")
            raise FatalTransferError(f'Failed to {action} "{pair.source}" to "{pair.target}": {e}') from e

        logger.info(f"{'Copied' if self.copy else 'Moved'}: {pair.source} -> {pair.target}")
        return TransferOutcome.TRANSFERRED

    def _notify(self, pair: RenamePair, outcome: TransferOutcome) -> None:
        if self.outcome_callback:
            self.outcome_callback(pair, outcome)
