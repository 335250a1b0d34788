"""Node.js install orchestration.

An install runs through a fixed sequence of states:

    CHECKING_INSTALLED -> DOWNLOADING -> INSTALLING -> RELOCATING
        -> FINALIZING -> DONE

Any failure moves the installer to ERROR. Steps that already completed are
not rolled back; the marker file is only written once everything else has
succeeded, so a failed install never looks installed.
"""

from __future__ import annotations

import json
import os
import shutil
from concurrent.futures import Future
from enum import Enum
from pathlib import Path, PurePath
from typing import Dict, Optional

from nodejs_installer.bootstrap.download import DistributionDownloader, Downloader
from nodejs_installer.bootstrap.paths import ProjectPaths
from nodejs_installer.bootstrap.platform import Environment
from nodejs_installer.bootstrap.versions import normalize_version
from nodejs_installer.core.exceptions import (
    ConfigurationError,
    FetchError,
    InstallerError,
    InstallFilesystemError,
)
from nodejs_installer.core.logging import get_logger
from nodejs_installer.nodejs.bin_scripts import make_path_relative
from nodejs_installer.nodejs.lister import DEFAULT_DIST_URL
from nodejs_installer.nodejs.package import RemotePackage, create_package

LOGGER = get_logger(__name__)

DEFAULT_PACKAGE_NAME = "nodejs-installer"
DEFAULT_TARGET_DIR = "vendor/nodejs/nodejs"

# Directory mode for directories the installer creates
DIRECTORY_MODE = 0o775


class InstallState(str, Enum):
    """States of a single install run."""

    IDLE = "idle"
    CHECKING_INSTALLED = "checking_installed"
    DOWNLOADING = "downloading"
    INSTALLING = "installing"
    RELOCATING = "relocating"
    FINALIZING = "finalizing"
    DONE = "done"
    ERROR = "error"


class Installer:
    """Installs a Node.js distribution into a project.

    Layout after a successful install of 18.16.0:
        lib/node_modules/       - module directory of the distribution
        lib/node_18_16_0.txt    - marker, {"version":"18.16.0"}
        {target_dir}/node       - runtime executables
    """

    def __init__(
        self,
        paths: ProjectPaths,
        downloader: Optional[Downloader] = None,
        package_name: str = DEFAULT_PACKAGE_NAME,
        target_dir: str = DEFAULT_TARGET_DIR,
        dist_url: str = DEFAULT_DIST_URL,
        environment: Optional[Environment] = None,
    ) -> None:
        """Initialize Installer.

        Args:
            paths: Install layout of the project.
            downloader: Download/extract facility. Defaults to a
                DistributionDownloader.
            package_name: Name of the owning package, used for download paths.
            target_dir: Where runtime executables go, relative to the project.
            dist_url: Base URL of the distribution server.
            environment: Host environment; detected when omitted.
        """
        self._paths = paths
        self._downloader = downloader or DistributionDownloader()
        self._package_name = package_name
        self._target_dir = target_dir
        self._dist_url = dist_url
        self._environment = environment
        self._state = InstallState.IDLE

    @property
    def state(self) -> InstallState:
        return self._state

    @property
    def runtime_dir(self) -> Path:
        """Absolute directory holding the runtime executables."""
        return self._paths.resolve(self._target_dir)

    def is_installed(self, version: str) -> bool:
        """Check whether the marker for a normalized version exists."""
        return self._paths.marker_path(version).exists()

    def installed_version(self) -> Optional[str]:
        """Return the version recorded by the install marker, if any."""
        for marker in self._paths.marker_files():
            try:
                data = json.loads(marker.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                LOGGER.warning(f"Unreadable install marker {marker}: {e}")
                continue
            if isinstance(data, dict) and data.get("version"):
                return str(data["version"])
        return None

    def install(self, version: str) -> Optional[RemotePackage]:
        """Install a Node.js version.

        Args:
            version: Version to install.

        Returns:
            The installed RemotePackage, or None if the version was already
            installed.

        Raises:
            ConfigurationError: If the version or platform is unsupported, or
                target_dir would overlap the project's install layout.
            FetchError: If the download failed.
            InstallFilesystemError: If unpacking, moving or deleting failed.
        """
        self._state = InstallState.CHECKING_INSTALLED
        try:
            self.check_target_dir()
            normalized = normalize_version(version)
            if self.is_installed(normalized):
                LOGGER.info(f"NodeJS v{version} is already installed")
                self._state = InstallState.DONE
                return None

            LOGGER.info(f"Installing NodeJS v{version}")

            relative_path = f"{self._package_name}/downloads/nodejs"
            package = create_package(
                f"{self._package_name}-virtual",
                version,
                relative_path,
                environment=self._environment,
                dist_url=self._dist_url,
            )
            download_dir = self._paths.download_dir(self._package_name)

            self._state = InstallState.DOWNLOADING
            LOGGER.info(f"Downloading {package.name} to {download_dir}")
            archive = self._await_download(package, download_dir)
            LOGGER.info(f"Downloaded {archive}")

            self._install_downloaded_package(package, archive)
        except InstallerError:
            self._state = InstallState.ERROR
            raise
        except OSError as e:
            self._state = InstallState.ERROR
            raise InstallFilesystemError(
                f"Filesystem error while {self._describe_state()}: {e}"
            ) from e

        self._state = InstallState.DONE
        return package

    def check_target_dir(self) -> None:
        """Reject a target_dir that is, or contains, a managed directory.

        Runtime executables are moved into target_dir entry by entry; a
        target_dir holding the project, lib/ or the vendor directory would
        mix the runtime into them.

        Raises:
            ConfigurationError: If target_dir overlaps the install layout.
        """
        runtime_dir = self.runtime_dir.resolve()
        managed = {
            "project root": self._paths.project_root,
            "lib directory": self._paths.lib_dir,
            "vendor directory": self._paths.vendor_dir,
        }
        for label, path in managed.items():
            if path.resolve().is_relative_to(runtime_dir):
                raise ConfigurationError(
                    f"target_dir {self._target_dir!r} must not be or contain the {label} ({path})"
                )

    def download(self, package: RemotePackage, target_dir: Path) -> "Future[Path]":
        """Hand a package to the downloader.

        Raises:
            FetchError: If the download could not be started.
            InstallFilesystemError: If the download directory could not be
                prepared.
        """
        try:
            return self._downloader.download(package, target_dir)
        except OSError as e:
            raise InstallFilesystemError(
                f"Could not prepare download of v{package.pretty_version} in {target_dir}: {e}"
            ) from e
        except InstallerError as e:
            raise FetchError(
                f"Unexpected error while downloading v{package.pretty_version}: {e}"
            ) from e

    def _await_download(self, package: RemotePackage, target_dir: Path) -> Path:
        future = self.download(package, target_dir)
        try:
            return future.result()
        except (InstallerError, OSError) as e:
            LOGGER.error("Package could not be downloaded")
            raise FetchError(
                f"Unexpected error while downloading v{package.pretty_version}: {e}"
            ) from e

    def _install_downloaded_package(self, package: RemotePackage, archive: Path) -> None:
        self._state = InstallState.INSTALLING
        install_dir = self._get_install_dir()

        LOGGER.info(f"Installing to {install_dir}")
        self._downloader.install(package, archive, install_dir)

        self._state = InstallState.RELOCATING
        self._relocate(install_dir)

        self._state = InstallState.FINALIZING
        self._delete_directory(install_dir)
        self._delete_marker_files()
        self._create_marker_file(package.normalized_version)

        LOGGER.info(f"Done. Installed NodeJS v{package.normalized_version}")

    def _get_install_dir(self) -> Path:
        install_dir = self._paths.scratch_dir
        if not install_dir.exists():
            LOGGER.info(f"Creating directory {install_dir}")
            install_dir.mkdir(mode=DIRECTORY_MODE, parents=True)
        return install_dir

    def _relocate(self, install_dir: Path) -> None:
        source_modules = install_dir / "lib" / "node_modules"
        target_modules = self._paths.modules_dir
        bin_source = install_dir / "bin"

        # Read before moving: bin/npm -> ../lib/node_modules/npm/bin/npm-cli.js
        module_links = _collect_module_links(bin_source, source_modules)

        if source_modules.is_dir():
            self._delete_directory(target_modules)
            LOGGER.info(
                f"Finishing installation, moving: {source_modules} to {target_modules}"
            )
            target_modules.parent.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
            shutil.move(str(source_modules), str(target_modules))
        else:
            LOGGER.warning(
                f"Distribution has no module directory at {source_modules}, skipping"
            )

        self._relocate_runtime(install_dir, module_links)

    def _relocate_runtime(self, install_dir: Path, module_links: Dict[str, PurePath]) -> None:
        runtime_dir = self.runtime_dir
        runtime_dir.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)

        bin_source = install_dir / "bin"
        if bin_source.is_dir():
            entries = [entry for entry in bin_source.iterdir() if entry.name not in module_links]
        else:
            # Single-file distributions (node.exe) land at the top level
            entries = [entry for entry in install_dir.iterdir() if entry.is_file()]

        # Only the names being installed are replaced; anything else in
        # runtime_dir is left alone
        for entry in entries:
            target = runtime_dir / entry.name
            self._delete_path(target)
            shutil.move(str(entry), str(target))

        for name, module_path in module_links.items():
            link_dir = make_path_relative(
                str(self._paths.modules_dir / module_path.parent), str(runtime_dir)
            )
            self._delete_path(runtime_dir / name)
            os.symlink(f"{link_dir}{module_path.name}", runtime_dir / name)

        LOGGER.info(f"Runtime executables installed to {runtime_dir}")

    def _delete_directory(self, path: Path, is_print: bool = True) -> bool:
        """Recursively delete a directory.

        Returns:
            False if there was nothing to delete.

        Raises:
            InstallFilesystemError: If deletion fails.
        """
        if path.is_symlink():
            path.unlink()
            return True
        if not path.exists():
            return False

        try:
            shutil.rmtree(path)
        except OSError as e:
            LOGGER.error(f"Could not delete: {path}")
            raise InstallFilesystemError(f"Could not delete {path}: {e}") from e

        if is_print:
            LOGGER.info(f"Deleted directory: {path}")
        return True

    def _delete_path(self, path: Path) -> None:
        if path.is_dir() and not path.is_symlink():
            self._delete_directory(path, is_print=False)
        elif path.exists() or path.is_symlink():
            path.unlink()

    def _delete_marker_files(self) -> None:
        for marker in self._paths.marker_files():
            marker.unlink()

    def _create_marker_file(self, version: str) -> None:
        marker = self._paths.marker_path(version)
        marker.write_text(json.dumps({"version": version}, separators=(",", ":")), encoding="utf-8")

    def _describe_state(self) -> str:
        return self._state.value.replace("_", " ")


def _collect_module_links(bin_dir: Path, modules_dir: Path) -> Dict[str, PurePath]:
    """Map bin symlink names to their targets relative to modules_dir.

    Only links that point into modules_dir are returned.
    """
    links: Dict[str, PurePath] = {}
    if not bin_dir.is_dir():
        return links

    modules_root = os.path.normpath(modules_dir)
    for entry in bin_dir.iterdir():
        if not entry.is_symlink():
            continue
        target = os.path.normpath(os.path.join(bin_dir, os.readlink(entry)))
        if os.path.commonpath([target, modules_root]) == modules_root:
            links[entry.name] = PurePath(os.path.relpath(target, modules_root))
    return links
