"""Tests for the status command."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

import pytest

from nodejs_installer.cli.commands.status import StatusCommand
from nodejs_installer.cli.exit_codes import EXIT_SUCCESS
from nodejs_installer.config.models import InstallerConfig
from nodejs_installer.core.runner import CommandResult
from tests.unit.fakes import LINUX_X64, FakeRunner


class TestStatusCommand:
    """Tests for StatusCommand.execute."""

    def test_name(self) -> None:
        assert StatusCommand(version="0.1.0").name == "status"

    def test_empty_project(self, project_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
        command = StatusCommand(version="0.1.0", runner=FakeRunner(), environment=LINUX_X64)

        code = command.execute(Namespace(path=str(project_root)), InstallerConfig(version="^18"))

        assert code == EXIT_SUCCESS
        output = capsys.readouterr().out
        assert "nodejs-installer version: 0.1.0" in output
        assert "Platform: linux-x64" in output
        assert "Version constraint: ^18" in output
        assert "Local NodeJS: not installed" in output
        assert "Global NodeJS: not found" in output
        assert "  node: missing" in output
        assert "  npm: missing" in output

    def test_installed_project(self, project_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
        lib_dir = project_root / "lib"
        lib_dir.mkdir()
        (lib_dir / "node_18_16_0.txt").write_text('{"version":"18.16.0"}')
        bin_dir = project_root / "vendor" / "bin"
        bin_dir.mkdir(parents=True)
        for name in ("node", "npm"):
            (bin_dir / name).write_text("#!/bin/sh\n")
            (bin_dir / name).chmod(0o755)
        runner = FakeRunner({("node", "-v"): CommandResult(0, "v20.0.0\n")})
        command = StatusCommand(version="0.1.0", runner=runner, environment=LINUX_X64)

        command.execute(Namespace(path=str(project_root)), InstallerConfig())

        output = capsys.readouterr().out
        assert "Local NodeJS: v18.16.0" in output
        assert "Global NodeJS: v20.0.0" in output
        assert "  node: ok" in output
        assert "  npm: ok" in output
