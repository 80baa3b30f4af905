"""Tests for rename CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from photorenamer.cli.main import app


runner = CliRunner()


class TestOptionValidation:
    """Option errors are reported before any prompt or file access."""

    def test_skip_duplicates_without_target(self, mixed_case_library: Path):
        before = pytest.list_files(mixed_case_library)

        result = runner.invoke(app, ["rename", "lower", str(mixed_case_library), "-s"])

        assert result.exit_code == 1
        assert "--skip-duplicates" in result.stdout
        assert "Are you sure" not in result.stdout
        assert pytest.list_files(mixed_case_library) == before

    def test_copy_without_target(self, mixed_case_library: Path):
        result = runner.invoke(app, ["rename", "lower", str(mixed_case_library), "--copy"])

        assert result.exit_code == 1
        assert "--copy" in result.stdout

    def test_missing_source(self, temp_dir: Path):
        result = runner.invoke(app, ["rename", "lower", str(temp_dir / "missing"), "-d"])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_bad_pattern(self, source_dir: Path):
        result = runner.invoke(
            app, ["rename", "pattern", str(source_dir), "-p", "(unclosed", "-r", "x"]
        )

        assert result.exit_code == 1
        assert "Are you sure" not in result.stdout

    def test_empty_replacement(self, source_dir: Path):
        result = runner.invoke(
            app, ["rename", "pattern", str(source_dir), "-p", "^(.+)$", "-r", ""]
        )

        assert result.exit_code == 1
        assert "replacement" in result.stdout

    def test_bad_algorithm(self, source_dir: Path):
        result = runner.invoke(
            app, ["rename", "hash", str(source_dir), "--algorithm", "crc32", "-d"]
        )

        assert result.exit_code == 1
        assert "crc32" in result.stdout

    def test_invalid_config_file(self, source_dir: Path, temp_dir: Path):
        config_file = temp_dir / "bad.yaml"
        config_file.write_text("hashing:\n  algorithm: crc32\n")

        result = runner.invoke(
            app, ["rename", "lower", str(source_dir), "-d", "--config", str(config_file)]
        )

        assert result.exit_code == 1


class TestConfirmation:
    """Tests for the live-run confirmation prompt."""

    def test_declined_leaves_files(self, mixed_case_library: Path):
        before = pytest.list_files(mixed_case_library)

        result = runner.invoke(app, ["rename", "lower", str(mixed_case_library)], input="n\n")

        assert result.exit_code == 1
        assert "Aborted" in result.stdout
        assert pytest.list_files(mixed_case_library) == before

    def test_accepted_renames(self, mixed_case_library: Path):
        result = runner.invoke(app, ["rename", "lower", str(mixed_case_library)], input="y\n")

        assert result.exit_code == 0
        assert "2 files renamed" in result.stdout
        assert (mixed_case_library / "a.jpg").exists()

    def test_force_skips_prompt(self, mixed_case_library: Path):
        result = runner.invoke(app, ["rename", "lower", str(mixed_case_library), "--force"])

        assert result.exit_code == 0
        assert "Are you sure" not in result.stdout
        assert pytest.list_files(mixed_case_library) == [
            "Holiday/img_0001.jpg",
            "Holiday/notes.txt",
            "a.jpg",
            "b.jpg",
        ]

    def test_config_can_disable_prompt(self, mixed_case_library: Path):
        # cwd is an isolated tmp_path
        Path("photorenamer.yaml").write_text("general:\n  confirm: false\n")

        result = runner.invoke(app, ["rename", "lower", str(mixed_case_library)])

        assert result.exit_code == 0
        assert "Are you sure" not in result.stdout
        assert (mixed_case_library / "a.jpg").exists()


class TestRenameLower:
    """Tests for 'photorenamer rename lower'."""

    def test_dry_run(self, mixed_case_library: Path):
        before = pytest.list_files(mixed_case_library)

        result = runner.invoke(app, ["rename", "lower", str(mixed_case_library), "--dry-run"])

        assert result.exit_code == 0
        assert "DRY RUN" in result.stdout
        assert "2 files would be renamed" in result.stdout
        assert "No files were modified" in result.stdout
        assert pytest.list_files(mixed_case_library) == before

    def test_nothing_to_do(self, source_dir: Path):
        pytest.create_test_file(source_dir, "already.jpg")

        result = runner.invoke(app, ["rename", "lower", str(source_dir), "-d"])

        assert result.exit_code == 0
        assert "No files to rename" in result.stdout

    def test_copy_to_target(self, mixed_case_library: Path, target_dir: Path):
        before = pytest.list_files(mixed_case_library)

        result = runner.invoke(
            app,
            ["rename", "lower", str(mixed_case_library), str(target_dir), "--copy", "--force"],
        )

        assert result.exit_code == 0
        assert "2 files copied" in result.stdout
        assert pytest.list_files(mixed_case_library) == before
        assert pytest.list_files(target_dir) == ["Holiday/img_0001.jpg", "a.jpg"]

    def test_skip_duplicates(self, source_dir: Path, target_dir: Path):
        pytest.create_test_file(source_dir, "A.jpg")
        pytest.create_test_file(source_dir, "a.JPG")

        result = runner.invoke(
            app,
            ["rename", "lower", str(source_dir), str(target_dir), "-s", "--force"],
        )

        assert result.exit_code == 0
        assert "1 possible duplicates found" in result.stdout
        assert "1 duplicates skipped" in result.stdout
        assert pytest.list_files(source_dir) == ["a.JPG"]
        assert pytest.list_files(target_dir) == ["a.jpg"]


class TestOtherModes:
    """Smoke tests for the remaining rename modes."""

    def test_pattern(self, source_dir: Path):
        pytest.create_test_file(source_dir, "photo.jpeg")
        pytest.create_test_file(source_dir, "other.png")

        result = runner.invoke(
            app,
            ["rename", "pattern", str(source_dir), "-p", r"^(.+)\.jpeg$", "-r", "$1.jpg", "-f"],
        )

        assert result.exit_code == 0
        assert pytest.list_files(source_dir) == ["other.png", "photo.jpg"]

    def test_date_pattern_defaults(self, source_dir: Path):
        pytest.create_test_file(source_dir, "24-05-01 10-00-00.jpg")

        result = runner.invoke(app, ["rename", "date-pattern", str(source_dir), "-f"])

        assert result.exit_code == 0
        assert pytest.list_files(source_dir) == ["2024-05-01_10-00-00.jpg"]

    def test_hash(self, source_dir: Path):
        pytest.create_test_file(source_dir, "subA/x.jpg", b"same")
        pytest.create_test_file(source_dir, "subB/y.jpg", b"same")

        result = runner.invoke(app, ["rename", "hash", str(source_dir), "-f"])

        assert result.exit_code == 0
        assert "1 possible duplicates found" in result.stdout
        assert pytest.list_files(source_dir) == ["subA/x.jpg", "subB/x-duplicate-001.jpg"]

    def test_filesize(self, source_dir: Path):
        pytest.create_test_file(source_dir, "a.jpg", b"12345")

        result = runner.invoke(app, ["rename", "filesize", str(source_dir), "-f"])

        assert result.exit_code == 0
        assert pytest.list_files(source_dir) == ["a-000000005.jpg"]

    def test_exif_date_without_exif(self, source_dir: Path):
        pytest.create_test_image(source_dir, "photo.jpg")

        result = runner.invoke(app, ["rename", "exif-date", str(source_dir), "-d"])

        assert result.exit_code == 0
        assert "No files to rename" in result.stdout
        assert pytest.list_files(source_dir) == ["photo.jpg"]
