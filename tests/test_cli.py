"""Tests for CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from pageindex.cli import _setup_logging, app
from pageindex.errors import ConfigError
from pageindex.index.indexer import IndexStats


runner = CliRunner()


class TestSetupLogging:
    """Tests for _setup_logging helper."""

    def test_setup_logging_verbose(self) -> None:
        """Verbose mode sets DEBUG level."""
        with patch("pageindex.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=True)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.DEBUG

    def test_setup_logging_normal(self) -> None:
        """Normal mode sets INFO level."""
        with patch("pageindex.cli.logging.basicConfig") as mock_config:
            _setup_logging(verbose=False)
            mock_config.assert_called_once()
            assert mock_config.call_args[1]["level"] == logging.INFO


class TestIndexCommand:
    """Tests for the index command."""

    @patch("pageindex.cli.run_indexing")
    def test_index_builds_config(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """Passes options through to the pipeline config."""
        mock_run.return_value = IndexStats(published=2, skipped=1, failed=0)

        result = runner.invoke(
            app,
            [
                "index",
                "--corpus-dir", str(tmp_path),
                "--url-map", "map.json",
                "--index-url", "http://search:9200",
                "--throttle-ms", "250",
                "--workers", "2",
            ],
        )

        assert result.exit_code == 0
        config = mock_run.call_args.args[0]
        assert config.corpus_dir == tmp_path
        assert config.url_map_file == "map.json"
        assert config.index_url == "http://search:9200"
        assert config.throttle_seconds == 0.25
        assert config.workers == 2
        assert config.run_index is True
        assert "Published: 2" in result.stdout

    @patch("pageindex.cli.run_indexing")
    def test_index_skip_flag(self, mock_run: MagicMock) -> None:
        """Reports that indexing is disabled."""
        mock_run.return_value = None

        result = runner.invoke(app, ["index", "--skip-index"])

        assert result.exit_code == 0
        assert mock_run.call_args.args[0].run_index is False
        assert "Indexing disabled" in result.stdout

    @patch("pageindex.cli.run_indexing")
    def test_index_run_gate_from_env(self, mock_run: MagicMock, tmp_path: Path) -> None:
        """Reads settings from PAGEINDEX_* environment variables."""
        mock_run.return_value = None

        result = runner.invoke(
            app,
            ["index"],
            env={"PAGEINDEX_RUN_INDEX": "false", "PAGEINDEX_CORPUS_DIR": str(tmp_path)},
        )

        assert result.exit_code == 0
        config = mock_run.call_args.args[0]
        assert config.run_index is False
        assert config.corpus_dir == tmp_path

    @patch("pageindex.cli.run_indexing")
    def test_index_config_error(self, mock_run: MagicMock) -> None:
        """Exits non-zero when the url map cannot be loaded."""
        mock_run.side_effect = ConfigError("bad map")

        result = runner.invoke(app, ["index"])

        assert result.exit_code == 1
        assert "bad map" in result.stdout

    def test_index_disabled_end_to_end(self, tmp_path: Path) -> None:
        """Does nothing, not even load the url map, when skipped."""
        result = runner.invoke(app, ["index", "--corpus-dir", str(tmp_path / "missing"), "--skip-index"])

        assert result.exit_code == 0
        assert "Indexing disabled" in result.stdout


class TestInspectCommand:
    """Tests for the inspect command."""

    def test_inspect_page(self, tmp_path: Path) -> None:
        """Prints title and token counts."""
        page = tmp_path / "a.html"
        page.write_text("<title>Cat</title><body><h1>Cats</h1><p>Cats are great</p></body>")

        result = runner.invoke(app, ["inspect", str(page)])

        assert result.exit_code == 0
        assert "Title: cat" in result.stdout
        assert "Tokens: 6" in result.stdout
        assert "cats" in result.stdout

    def test_inspect_skipped_page(self, tmp_path: Path) -> None:
        """Reports why a page would be skipped."""
        page = tmp_path / "a.html"
        page.write_text("<body>no title</body>")

        result = runner.invoke(app, ["inspect", str(page)])

        assert result.exit_code == 0
        assert "missing_title" in result.stdout

    def test_inspect_missing_file(self, tmp_path: Path) -> None:
        """Rejects paths that do not exist."""
        result = runner.invoke(app, ["inspect", str(tmp_path / "nope.html")])

        assert result.exit_code != 0
