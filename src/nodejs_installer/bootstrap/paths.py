"""Path management for nodejs-installer.

Handles the ~/.nodejs-installer home directory (global configuration) and
the per-project install layout. Every path is derived from an explicit
project root; the process working directory is never consulted or changed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, List, Union

# Default directory name under user home
DEFAULT_HOME_DIR_NAME = ".nodejs-installer"

# Environment variable to override home directory
NODEJS_INSTALLER_HOME_ENV = "NODEJS_INSTALLER_HOME"


def get_installer_home() -> Path:
    """Get the nodejs-installer home directory path.

    Resolution order:
    1. NODEJS_INSTALLER_HOME environment variable (if set)
    2. ~/.nodejs-installer (default)

    Returns:
        Path to the nodejs-installer home directory.
    """
    env_home = os.environ.get(NODEJS_INSTALLER_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


def marker_file_name(version: str) -> str:
    """File name of the install marker for a version (dots become underscores)."""
    return f"node_{version.replace('.', '_')}.txt"


@dataclass
class ProjectPaths:
    """Manages install paths within a project.

    Directory structure:
        {project_root}/
            lib/
                node_modules/           - Relocated Node.js module directory
                node_modules_install/   - Scratch extraction directory
                node_18_16_0.txt        - Marker for the installed version
            vendor/
                {package}/downloads/nodejs/ - Downloaded archives
                nodejs/nodejs/          - Node.js runtime executables
                bin/                    - node/npm wrapper scripts
    """

    project_root: Path
    vendor_dir_name: str = "vendor"

    # Subdirectory names
    _LIB_DIR: ClassVar[str] = "lib"
    _MODULES_DIR: ClassVar[str] = "node_modules"
    _SCRATCH_DIR: ClassVar[str] = "node_modules_install"
    _MARKER_GLOB: ClassVar[str] = "node_*.txt"

    @property
    def lib_dir(self) -> Path:
        return self.project_root / self._LIB_DIR

    @property
    def modules_dir(self) -> Path:
        """Final location of the Node.js module directory."""
        return self.lib_dir / self._MODULES_DIR

    @property
    def scratch_dir(self) -> Path:
        """Temporary directory the distribution is extracted into."""
        return self.lib_dir / self._SCRATCH_DIR

    @property
    def vendor_dir(self) -> Path:
        return self.resolve(self.vendor_dir_name)

    def download_dir(self, package_name: str) -> Path:
        """Directory downloaded archives are stored in.

        Args:
            package_name: Name of the owning package (e.g., 'nodejs-installer').
        """
        return self.vendor_dir / package_name / "downloads" / "nodejs"

    def marker_path(self, version: str) -> Path:
        """Path of the install marker for a normalized version."""
        return self.lib_dir / marker_file_name(version)

    def marker_files(self) -> List[Path]:
        """All install marker files currently present."""
        if not self.lib_dir.is_dir():
            return []
        return sorted(self.lib_dir.glob(self._MARKER_GLOB))

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve a path against the project root unless already absolute."""
        path = Path(path)
        if path.is_absolute():
            return path
        return self.project_root / path
