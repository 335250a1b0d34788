"""Wrapper scripts for node and npm.

Scripts are rendered from templates shipped in ``nodejs_installer/templates``:
``local/`` templates receive the runtime directory relative to the bin
directory, ``global/`` templates the absolute path of a global executable.
"""

from __future__ import annotations

import os
from importlib.resources import files
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from nodejs_installer.bootstrap.paths import ProjectPaths
from nodejs_installer.bootstrap.platform import Environment, get_environment
from nodejs_installer.core.exceptions import ConfigurationError, InstallFilesystemError
from nodejs_installer.core.logging import get_logger

if TYPE_CHECKING:
    from nodejs_installer.nodejs.discovery import NodeDiscovery

LOGGER = get_logger(__name__)

BIN_NAMES = ("node", "npm")
PLACEHOLDER = "%s"
SCRIPT_MODE = 0o755


def make_path_relative(end_path: str, start_path: str) -> str:
    """Express end_path relative to start_path.

    Both paths are absolute. The result always ends with a slash, and is
    ``./`` when both paths are the same.
    """
    end_path = end_path.replace("\\", "/")
    start_path = start_path.replace("\\", "/")

    start_parts = start_path.strip("/").split("/")
    end_parts = end_path.strip("/").split("/")

    # Find where the common prefix stops
    index = 0
    while (
        index < len(start_parts)
        and index < len(end_parts)
        and start_parts[index] == end_parts[index]
    ):
        index += 1

    depth = len(start_parts) - index
    remainder = "/".join(end_parts[index:])
    relative = "../" * depth + (f"{remainder}/" if remainder else "")

    return relative or "./"


def load_template(mode: str, script_name: str) -> str:
    """Read a bin script template ('local' or 'global' mode)."""
    return files("nodejs_installer").joinpath("templates", mode, script_name).read_text(
        encoding="utf-8"
    )


class BinScriptGenerator:
    """Writes node/npm wrapper scripts into a bin directory."""

    def __init__(
        self,
        paths: ProjectPaths,
        discovery: Optional["NodeDiscovery"] = None,
        environment: Optional[Environment] = None,
    ) -> None:
        self._paths = paths
        self._discovery = discovery
        self._environment = environment

    @property
    def environment(self) -> Environment:
        if self._environment is None:
            self._environment = get_environment()
        return self._environment

    def script_names(self) -> List[str]:
        if self.environment.is_windows:
            return [f"{name}.bat" for name in BIN_NAMES]
        return list(BIN_NAMES)

    def create_bin_scripts(self, bin_dir: str, target_dir: str, is_local: bool) -> List[Path]:
        """Write the wrapper scripts.

        Args:
            bin_dir: Directory to write scripts into.
            target_dir: Directory holding the local runtime executables.
            is_local: Point at the local runtime instead of a global one.

        Returns:
            Paths of the scripts written.

        Raises:
            ConfigurationError: If local scripts would replace the runtime
                executables they point at.
        """
        if is_local:
            self.check_local_layout(bin_dir, target_dir)

        bin_path = self._paths.resolve(bin_dir)
        if not bin_path.exists():
            try:
                bin_path.mkdir(mode=0o775, parents=True)
            except OSError as e:
                raise InstallFilesystemError(f"Unable to create directory {bin_path}") from e

        full_target_dir = self._paths.resolve(target_dir).resolve()
        bin_path = bin_path.resolve()

        written = []
        for script_name in self.script_names():
            script = self._create_bin_script(bin_path, full_target_dir, script_name, is_local)
            if script is not None:
                written.append(script)
        return written

    def check_local_layout(self, bin_dir: str, target_dir: str) -> None:
        """Reject a bin_dir that is the runtime directory itself.

        A local wrapper written there would overwrite the executable it
        runs.

        Raises:
            ConfigurationError: If both resolve to the same directory.
        """
        if self._paths.resolve(bin_dir).resolve() == self._paths.resolve(target_dir).resolve():
            raise ConfigurationError(
                f"bin_dir {bin_dir!r} and target_dir {target_dir!r} must be different directories"
            )

    def _create_bin_script(
        self,
        bin_dir: Path,
        full_target_dir: Path,
        script_name: str,
        is_local: bool,
    ) -> Optional[Path]:
        content = load_template("local" if is_local else "global", script_name)

        if is_local:
            path = make_path_relative(str(full_target_dir), str(bin_dir)).rstrip("/")
        else:
            path = self._global_path(script_name)
            if not path:
                LOGGER.warning(f"No global {script_name} found, not writing wrapper")
                return None
            if Path(path).resolve().is_relative_to(bin_dir):
                # The "global" executable is the wrapper itself
                LOGGER.debug(f"{path} is inside {bin_dir}, keeping existing script")
                return None

        script_path = bin_dir / script_name
        try:
            script_path.write_text(content.replace(PLACEHOLDER, path, 1), encoding="utf-8")
            os.chmod(script_path, SCRIPT_MODE)
        except OSError as e:
            raise InstallFilesystemError(f"Unable to write {script_path}: {e}") from e

        LOGGER.info(f"Created {script_path}")
        return script_path

    def _global_path(self, script_name: str) -> Optional[str]:
        if self._discovery is None:
            from nodejs_installer.nodejs.discovery import NodeDiscovery

            self._discovery = NodeDiscovery(environment=self.environment)

        command = script_name[: -len(".bat")] if script_name.endswith(".bat") else script_name
        if command == "node":
            return self._discovery.global_install_path()
        return self._discovery.global_command_path(command)
