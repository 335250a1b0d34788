"""Tests for nodejs_installer.cli entry point."""

from __future__ import annotations

from unittest.mock import patch


class TestMainEntry:
    """Tests for the main() entry point."""

    @patch("nodejs_installer.cli.CLIRunner")
    def test_main_creates_runner(self, mock_runner_cls) -> None:
        """Verify main() creates CLIRunner and calls run."""
        mock_runner = mock_runner_cls.return_value
        mock_runner.run.return_value = 0

        from nodejs_installer.cli import main
        result = main()

        assert result == 0
        mock_runner.run.assert_called_once_with(None)

    @patch("nodejs_installer.cli.CLIRunner")
    def test_main_passes_argv(self, mock_runner_cls) -> None:
        """Verify main() passes argv to runner."""
        mock_runner = mock_runner_cls.return_value
        mock_runner.run.return_value = 2

        from nodejs_installer.cli import main
        result = main(["install", "--node-version", "18.16.0"])

        assert result == 2
        mock_runner.run.assert_called_once_with(["install", "--node-version", "18.16.0"])
