"""Tests for nodejs_installer.nodejs.discovery."""

from __future__ import annotations

from pathlib import Path

from nodejs_installer.core.runner import CommandResult
from nodejs_installer.nodejs.discovery import NodeDiscovery
from tests.unit.fakes import LINUX_X64, WINDOWS_X64, FakeRunner


class TestGlobalInstallVersion:
    """Tests for NodeDiscovery.global_install_version."""

    def test_prefers_nodejs_command(self) -> None:
        runner = FakeRunner({
            ("nodejs", "-v"): CommandResult(0, "v18.16.0\n"),
            ("node", "-v"): CommandResult(0, "v20.0.0\n"),
        })
        assert NodeDiscovery(runner, LINUX_X64).global_install_version() == "18.16.0"

    def test_falls_back_to_node(self) -> None:
        runner = FakeRunner({("node", "-v"): CommandResult(0, "v20.0.0\n")})
        discovery = NodeDiscovery(runner, LINUX_X64)

        assert discovery.global_install_version() == "20.0.0"
        assert [call[0] for call in runner.calls] == [("nodejs", "-v"), ("node", "-v")]

    def test_uses_last_output_line(self) -> None:
        runner = FakeRunner({
            ("node", "-v"): CommandResult(0, "Debugger listening...\nv18.16.0\n\n"),
        })
        assert NodeDiscovery(runner, LINUX_X64).global_install_version() == "18.16.0"

    def test_none_when_not_installed(self) -> None:
        assert NodeDiscovery(FakeRunner(), LINUX_X64).global_install_version() is None


class TestGlobalCommandPath:
    """Tests for NodeDiscovery.global_command_path and global_install_path."""

    def test_uses_which_on_unix(self) -> None:
        runner = FakeRunner({("which", "npm"): CommandResult(0, "/usr/local/bin/npm\n")})
        assert NodeDiscovery(runner, LINUX_X64).global_command_path("npm") == "/usr/local/bin/npm"

    def test_uses_where_on_windows(self) -> None:
        runner = FakeRunner({
            ("where", "/F", "npm"): CommandResult(
                0,
                '"C:\\Program Files\\nodejs\\npm"\r\n"C:\\Program Files\\nodejs\\npm.cmd"\r\n',
            ),
        })
        path = NodeDiscovery(runner, WINDOWS_X64).global_command_path("npm")
        assert path == "C:\\Program Files\\nodejs\\npm"

    def test_none_when_command_fails(self) -> None:
        assert NodeDiscovery(FakeRunner(), LINUX_X64).global_command_path("npm") is None

    def test_none_on_empty_output(self) -> None:
        runner = FakeRunner({("which", "npm"): CommandResult(0, "\n")})
        assert NodeDiscovery(runner, LINUX_X64).global_command_path("npm") is None

    def test_install_path_prefers_nodejs(self) -> None:
        runner = FakeRunner({
            ("which", "nodejs"): CommandResult(0, "/usr/bin/nodejs\n"),
            ("which", "node"): CommandResult(0, "/usr/bin/node\n"),
        })
        assert NodeDiscovery(runner, LINUX_X64).global_install_path() == "/usr/bin/nodejs"

    def test_install_path_falls_back_to_node(self) -> None:
        runner = FakeRunner({("which", "node"): CommandResult(0, "/usr/bin/node\n")})
        assert NodeDiscovery(runner, LINUX_X64).global_install_path() == "/usr/bin/node"


class TestLocalInstallVersion:
    """Tests for NodeDiscovery.local_install_version."""

    def test_runs_wrapper_in_project_root(self, tmp_path: Path) -> None:
        script = str(tmp_path / "vendor" / "bin" / "node")
        runner = FakeRunner({(script, "-v"): CommandResult(0, "v18.16.0\n")})

        version = NodeDiscovery(runner, LINUX_X64).local_install_version(Path("vendor/bin"), tmp_path)

        assert version == "18.16.0"
        assert runner.calls == [((script, "-v"), tmp_path)]

    def test_windows_uses_bat_wrapper(self, tmp_path: Path) -> None:
        runner = FakeRunner()
        NodeDiscovery(runner, WINDOWS_X64).local_install_version(Path("vendor/bin"), tmp_path)

        assert runner.calls[0][0][0].endswith("node.bat")

    def test_none_without_local_install(self, tmp_path: Path) -> None:
        discovery = NodeDiscovery(FakeRunner(), LINUX_X64)
        assert discovery.local_install_version(Path("vendor/bin"), tmp_path) is None
