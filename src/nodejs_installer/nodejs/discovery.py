"""Discovery of existing Node.js installations."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from nodejs_installer.bootstrap.platform import Environment, get_environment
from nodejs_installer.core.logging import get_logger
from nodejs_installer.core.runner import CommandRunner, SubprocessRunner

LOGGER = get_logger(__name__)

# Some Linux distributions ship the binary as "nodejs"
GLOBAL_NODE_COMMANDS = ("nodejs", "node")


def _parse_version_output(output: str) -> Optional[str]:
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    if not lines:
        return None
    return lines[-1].lstrip("v")


class NodeDiscovery:
    """Finds globally installed and project-local Node.js runtimes."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        environment: Optional[Environment] = None,
    ) -> None:
        self._runner = runner or SubprocessRunner()
        self._environment = environment

    @property
    def environment(self) -> Environment:
        if self._environment is None:
            self._environment = get_environment()
        return self._environment

    def global_install_version(self) -> Optional[str]:
        """Version of the global Node.js, without the leading 'v'."""
        for command in GLOBAL_NODE_COMMANDS:
            result = self._runner.run([command, "-v"])
            if result.ok:
                return _parse_version_output(result.stdout)
        return None

    def global_install_path(self) -> Optional[str]:
        """Full path of the global Node.js executable."""
        for command in GLOBAL_NODE_COMMANDS:
            path = self.global_command_path(command)
            if path:
                return path
        return None

    def global_command_path(self, command: str) -> Optional[str]:
        """Full path of a command on the PATH, or None when not found."""
        if self.environment.is_windows:
            result = self._runner.run(["where", "/F", command])
        else:
            result = self._runner.run(["which", command])

        if not result.ok:
            return None

        # "where" can return several lines, one per match
        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if not lines:
            return None
        return lines[0].strip('"')

    def local_install_version(self, bin_dir: Path, project_root: Path) -> Optional[str]:
        """Version reported by the project's node wrapper script.

        Args:
            bin_dir: Directory holding the wrapper scripts, relative to
                project_root unless absolute.
            project_root: Project root the command runs in.
        """
        script_name = "node.bat" if self.environment.is_windows else "node"
        bin_path = Path(bin_dir)
        if not bin_path.is_absolute():
            bin_path = project_root / bin_path

        result = self._runner.run([str(bin_path / script_name), "-v"], cwd=project_root)
        if not result.ok:
            LOGGER.debug(f"No local Node.js found in {bin_path}")
            return None
        return _parse_version_output(result.stdout)
