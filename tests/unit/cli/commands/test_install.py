"""Tests for the install command."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from nodejs_installer.cli.commands.install import MAX_CHOICES, InstallCommand
from nodejs_installer.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from nodejs_installer.config.models import InstallerConfig
from nodejs_installer.core.exceptions import ConfigurationError
from nodejs_installer.core.runner import CommandResult
from tests.unit.fakes import LINUX_X64, FakeDownloader, FakeRunner

INDEX_PAGE = '<a href="v18.16.0/">v18.16.0/</a>\n<a href="v20.0.0/">v20.0.0/</a>\n'

GLOBAL_NODE_18 = {
    ("node", "-v"): CommandResult(0, "v18.16.0\n"),
    ("which", "node"): CommandResult(0, "/usr/bin/node\n"),
    ("which", "npm"): CommandResult(0, "/usr/bin/npm\n"),
}


def _args(project_root: Path, interactive: bool = False) -> Namespace:
    return Namespace(path=str(project_root), interactive=interactive)


def _command(downloader: FakeDownloader, runner: FakeRunner = None, fetch=None) -> InstallCommand:
    return InstallCommand(
        downloader=downloader,
        runner=runner or FakeRunner(),
        fetch=fetch or (lambda url: INDEX_PAGE),
        environment=LINUX_X64,
    )


class TestInstallCommand:
    """Tests for InstallCommand.execute."""

    def test_name(self) -> None:
        assert InstallCommand().name == "install"

    def test_not_a_directory(self, tmp_path: Path, fake_downloader: FakeDownloader) -> None:
        code = _command(fake_downloader).execute(_args(tmp_path / "missing"), InstallerConfig())
        assert code == EXIT_INVALID_USAGE

    def test_uses_matching_global_install(
        self,
        project_root: Path,
        fake_downloader: FakeDownloader,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        command = _command(fake_downloader, FakeRunner(GLOBAL_NODE_18))

        code = command.execute(_args(project_root), InstallerConfig(version="^18"))

        assert code == EXIT_SUCCESS
        assert "Using global NodeJS v18.16.0" in capsys.readouterr().out
        assert fake_downloader.downloaded == []
        node = (project_root / "vendor" / "bin" / "node").read_text()
        assert 'exec "/usr/bin/node" "$@"' in node

    def test_global_install_not_matching_installs_locally(
        self, project_root: Path, fake_downloader: FakeDownloader
    ) -> None:
        command = _command(fake_downloader, FakeRunner(GLOBAL_NODE_18))

        command.execute(_args(project_root), InstallerConfig(version="^20"))

        assert fake_downloader.downloaded == [
            "https://nodejs.org/dist/v20.0.0/node-v20.0.0-linux-x64.tar.gz"
        ]
        assert (project_root / "lib" / "node_20_0_0.txt").is_file()

    def test_force_local_ignores_global_install(
        self, project_root: Path, fake_downloader: FakeDownloader
    ) -> None:
        command = _command(fake_downloader, FakeRunner(GLOBAL_NODE_18))

        command.execute(_args(project_root), InstallerConfig(version="^18", force_local=True))

        assert len(fake_downloader.downloaded) == 1
        assert (project_root / "lib" / "node_18_16_0.txt").is_file()

    def test_exact_version_skips_listing(
        self,
        project_root: Path,
        fake_downloader: FakeDownloader,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def fetch(url: str) -> str:
            raise AssertionError("listing should not be fetched")

        command = _command(fake_downloader, fetch=fetch)

        code = command.execute(_args(project_root), InstallerConfig(version="18.16.0"))

        assert code == EXIT_SUCCESS
        assert "Installed NodeJS v18.16.0" in capsys.readouterr().out
        local_node = (project_root / "vendor" / "bin" / "node").read_text()
        assert "../nodejs/nodejs/node" in local_node

    def test_constraint_resolves_to_highest_match(
        self, project_root: Path, fake_downloader: FakeDownloader
    ) -> None:
        _command(fake_downloader).execute(_args(project_root), InstallerConfig(version="*"))

        assert fake_downloader.downloaded[0].endswith("/v20.0.0/node-v20.0.0-linux-x64.tar.gz")

    def test_keeps_installed_version_matching_constraint(
        self,
        project_root: Path,
        fake_downloader: FakeDownloader,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        lib_dir = project_root / "lib"
        lib_dir.mkdir()
        (lib_dir / "node_18_16_0.txt").write_text('{"version":"18.16.0"}')

        code = _command(fake_downloader).execute(_args(project_root), InstallerConfig(version="^18"))

        assert code == EXIT_SUCCESS
        assert "NodeJS v18.16.0 is already installed" in capsys.readouterr().out
        assert fake_downloader.downloaded == []
        assert (project_root / "vendor" / "bin" / "node").is_file()

    def test_exact_version_already_installed(
        self,
        project_root: Path,
        fake_downloader: FakeDownloader,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        lib_dir = project_root / "lib"
        lib_dir.mkdir()
        (lib_dir / "node_18_16_0.txt").write_text('{"version":"18.16.0"}')

        _command(fake_downloader).execute(_args(project_root), InstallerConfig(version="18.16.0"))

        assert "NodeJS v18.16.0 is already installed" in capsys.readouterr().out
        assert fake_downloader.downloaded == []

    def test_no_matching_version(self, project_root: Path, fake_downloader: FakeDownloader) -> None:
        with pytest.raises(ConfigurationError, match="No Node.js version matches"):
            _command(fake_downloader).execute(_args(project_root), InstallerConfig(version="^22"))

    def test_interactive_selection(
        self, project_root: Path, fake_downloader: FakeDownloader
    ) -> None:
        prompt = MagicMock()
        prompt.ask.return_value = "18.16.0"

        with patch("questionary.select", return_value=prompt) as mock_select:
            _command(fake_downloader).execute(
                _args(project_root, interactive=True), InstallerConfig(version="*")
            )

        kwargs = mock_select.call_args[1]
        assert kwargs["choices"] == ["20.0.0", "18.16.0"]
        assert kwargs["default"] == "20.0.0"
        assert len(kwargs["choices"]) <= MAX_CHOICES
        assert (project_root / "lib" / "node_18_16_0.txt").is_file()

    def test_interactive_abort(
        self,
        project_root: Path,
        fake_downloader: FakeDownloader,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        prompt = MagicMock()
        prompt.ask.return_value = None

        with patch("questionary.select", return_value=prompt):
            code = _command(fake_downloader).execute(
                _args(project_root, interactive=True), InstallerConfig(version="*")
            )

        assert code == EXIT_SUCCESS
        assert "Aborted." in capsys.readouterr().out
        assert fake_downloader.downloaded == []

    def test_bin_dir_equal_to_target_dir_rejected_before_download(
        self, project_root: Path, fake_downloader: FakeDownloader
    ) -> None:
        config = InstallerConfig(version="18.16.0", bin_dir="vendor/bin", target_dir="vendor/bin")

        with pytest.raises(ConfigurationError, match="must be different directories"):
            _command(fake_downloader).execute(_args(project_root), config)

        assert fake_downloader.downloaded == []
        assert not (project_root / "lib").exists()

    def test_target_dir_holding_vendor_rejected_before_download(
        self, project_root: Path, fake_downloader: FakeDownloader
    ) -> None:
        config = InstallerConfig(version="18.16.0", target_dir="vendor")

        with pytest.raises(ConfigurationError, match="vendor directory"):
            _command(fake_downloader).execute(_args(project_root), config)

        assert fake_downloader.downloaded == []

    def test_default_downloader_is_closed(
        self, project_root: Path, fake_downloader: FakeDownloader
    ) -> None:
        command = InstallCommand(runner=FakeRunner(), environment=LINUX_X64)

        with patch(
            "nodejs_installer.cli.commands.install.DistributionDownloader"
        ) as mock_downloader_cls:
            mock_downloader_cls.return_value.__enter__.return_value = fake_downloader
            code = command.execute(_args(project_root), InstallerConfig(version="18.16.0"))

        assert code == EXIT_SUCCESS
        mock_downloader_cls.assert_called_once_with(timeout=InstallerConfig().timeout)
        mock_downloader_cls.return_value.__exit__.assert_called_once()
        assert (project_root / "lib" / "node_18_16_0.txt").is_file()
