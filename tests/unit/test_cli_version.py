"""Tests for version CLI command."""

from typer.testing import CliRunner

from photorenamer import __version__
from photorenamer.cli.main import app


runner = CliRunner()


class TestVersionCommand:
    """Tests for 'photorenamer version' command."""

    def test_version_shows_version_number(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert f"PhotoRenamer v{__version__}" in result.stdout

    def test_verbose_flag_accepted(self):
        result = runner.invoke(app, ["--verbose", "version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout
