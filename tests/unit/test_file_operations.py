"""Unit tests for photorenamer.core.file_operations."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from photorenamer.core.file_operations import (
    FatalTransferError,
    FileTransferExecutor,
    ensure_directory,
)
from photorenamer.core.models import (
    DuplicateGroupCollection,
    FileDescriptor,
    RenamePair,
    TransferOutcome,
)


def collection_of(*pairs: tuple[Path, Path]) -> DuplicateGroupCollection:
    """Collection with one group per (source, target) pair."""
    collection = DuplicateGroupCollection()
    for i, (source, target) in enumerate(pairs):
        group = collection.add(str(i), FileDescriptor(path=source), FileDescriptor(path=target))
        group.renames = [RenamePair(FileDescriptor(path=source), FileDescriptor(path=target))]
    return collection


class TestEnsureDirectory:
    """Tests for ensure_directory."""

    def test_creates_nested(self, temp_dir: Path):
        path = temp_dir / "a" / "b" / "c"

        ensure_directory(path)

        assert path.is_dir()

    def test_existing_directory(self, temp_dir: Path):
        ensure_directory(temp_dir)

        assert temp_dir.is_dir()

    def test_file_in_the_way(self, temp_dir: Path):
        blocker = pytest.create_test_file(temp_dir, "blocker")

        with pytest.raises(FatalTransferError, match="was not created"):
            ensure_directory(blocker / "sub")


class TestFileTransferExecutor:
    """Tests for FileTransferExecutor."""

    def test_move(self, source_dir: Path):
        source = pytest.create_test_file(source_dir, "a.JPG", b"content")
        target = source_dir / "a.jpg"

        report = FileTransferExecutor().execute(collection_of((source, target)))

        assert not source.exists()
        assert target.read_bytes() == b"content"
        assert report.transferred == 1
        assert report.outcomes[0].outcome == TransferOutcome.TRANSFERRED

    def test_copy_keeps_source(self, source_dir: Path, target_dir: Path):
        source = pytest.create_test_file(source_dir, "a.jpg", b"content")
        target = target_dir / "sub" / "a.jpg"

        report = FileTransferExecutor(copy=True).execute(collection_of((source, target)))

        assert source.exists()
        assert target.read_bytes() == b"content"
        assert report.copy is True

    def test_copy_preserves_mtime(self, source_dir: Path, target_dir: Path):
        source = pytest.create_test_file(source_dir, "a.jpg")
        os.utime(source, (1_000_000_000, 1_000_000_000))
        target = target_dir / "a.jpg"

        FileTransferExecutor(copy=True).execute(collection_of((source, target)))

        assert target.stat().st_mtime == pytest.approx(1_000_000_000)

    def test_dry_run_touches_nothing(self, source_dir: Path, target_dir: Path):
        source = pytest.create_test_file(source_dir, "a.jpg")
        target = target_dir / "new" / "b.jpg"

        report = FileTransferExecutor(dry_run=True).execute(collection_of((source, target)))

        assert source.exists()
        assert not target.parent.exists()
        assert report.would_transfer == 1
        assert report.transferred == 0
        assert report.outcomes[0].outcome == TransferOutcome.SKIPPED_DRY_RUN

    def test_skip_duplicates(self, source_dir: Path, target_dir: Path):
        first = pytest.create_test_file(source_dir, "a.jpg")
        second = pytest.create_test_file(source_dir, "b.jpg")
        collection = collection_of(
            (first, target_dir / "a.jpg"),
            (second, target_dir / "a-duplicate-001.jpg"),
        )

        report = FileTransferExecutor(skip_duplicates=True).execute(collection)

        assert second.exists()
        assert not (target_dir / "a-duplicate-001.jpg").exists()
        assert report.skipped_duplicates == 1
        assert report.possible_duplicates == 1
        assert report.transferred == 1

    def test_possible_duplicates_counted_without_skip(self, source_dir: Path):
        source = pytest.create_test_file(source_dir, "b.jpg")
        target = source_dir / "a-duplicate-001.jpg"

        report = FileTransferExecutor(dry_run=True).execute(collection_of((source, target)))

        assert report.possible_duplicates == 1
        assert report.would_transfer == 1

    def test_outcome_callback(self, source_dir: Path):
        source = pytest.create_test_file(source_dir, "a.JPG")
        seen = []
        executor = FileTransferExecutor(
            dry_run=True,
            outcome_callback=lambda pair, outcome: seen.append((pair.source.filename, outcome)),
        )

        executor.execute(collection_of((source, source_dir / "a.jpg")))

        assert seen == [("a.JPG", TransferOutcome.SKIPPED_DRY_RUN)]

    def test_missing_source_is_fatal(self, source_dir: Path):
        source = source_dir / "gone.jpg"

        with pytest.raises(FatalTransferError, match="gone.jpg"):
            FileTransferExecutor().execute(collection_of((source, source_dir / "new.jpg")))

    def test_unwritable_target_is_fatal(self, source_dir: Path):
        source = pytest.create_test_file(source_dir, "a.jpg")
        target = pytest.create_test_file(source_dir, "b.jpg")

        with patch.object(FileDescriptor, "is_writable", return_value=False):
            with pytest.raises(FatalTransferError, match="is not writeable"):
                FileTransferExecutor().execute(collection_of((source, target)))

        assert source.exists()

    def test_directory_not_created_is_fatal(self, source_dir: Path):
        source = pytest.create_test_file(source_dir, "a.jpg")
        blocker = pytest.create_test_file(source_dir, "blocker")

        with pytest.raises(FatalTransferError, match="was not created"):
            FileTransferExecutor().execute(collection_of((source, blocker / "a.jpg")))

    def test_fatal_error_stops_batch(self, source_dir: Path, target_dir: Path):
        first = pytest.create_test_file(source_dir, "1.jpg")
        missing = source_dir / "2.jpg"
        third = pytest.create_test_file(source_dir, "3.jpg")
        collection = collection_of(
            (first, target_dir / "1.jpg"),
            (missing, target_dir / "2.jpg"),
            (third, target_dir / "3.jpg"),
        )

        with pytest.raises(FatalTransferError) as exc_info:
            FileTransferExecutor().execute(collection)

        # Earlier transfers stay, later pairs are not attempted
        assert (target_dir / "1.jpg").exists()
        assert third.exists()
        assert not (target_dir / "3.jpg").exists()

        report = exc_info.value.report
        assert report.transferred == 1
        assert report.failed[0].source.path == missing
        assert exc_info.value.pair.outcome == TransferOutcome.FAILED_FATAL

    def test_os_error_is_fatal(self, source_dir: Path):
        source = pytest.create_test_file(source_dir, "a.jpg")

        with patch("photorenamer.core.file_operations.shutil.move", side_effect=OSError("disk full")):
            with pytest.raises(FatalTransferError, match="disk full"):
                FileTransferExecutor().execute(collection_of((source, source_dir / "b.jpg")))
