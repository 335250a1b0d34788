"""Install command implementation.

Decides between a global and a project-local Node.js:
1. Reuse a global Node.js that satisfies the version constraint (unless
   force_local is set)
2. Keep an installed local version that satisfies the constraint
3. Otherwise resolve the constraint against the published versions and
   install the best match
Wrapper scripts are written in every case.
"""

from __future__ import annotations

from argparse import Namespace
from functools import partial
from pathlib import Path
from typing import Callable, Optional

import questionary
from questionary import Style

from nodejs_installer.bootstrap.download import DistributionDownloader, Downloader, fetch_text
from nodejs_installer.bootstrap.paths import ProjectPaths
from nodejs_installer.bootstrap.platform import Environment
from nodejs_installer.bootstrap.versions import (
    is_exact_version,
    matching_versions,
    normalize_version,
    satisfies,
)
from nodejs_installer.cli.commands import Command
from nodejs_installer.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from nodejs_installer.config.models import InstallerConfig
from nodejs_installer.core.exceptions import ConfigurationError
from nodejs_installer.core.logging import get_logger
from nodejs_installer.core.runner import CommandRunner
from nodejs_installer.nodejs.bin_scripts import BinScriptGenerator
from nodejs_installer.nodejs.discovery import NodeDiscovery
from nodejs_installer.nodejs.installer import Installer
from nodejs_installer.nodejs.lister import VersionLister

LOGGER = get_logger(__name__)

# Custom questionary style
STYLE = Style([
    ("qmark", "fg:cyan bold"),
    ("question", "bold"),
    ("answer", "fg:cyan"),
    ("pointer", "fg:cyan bold"),
    ("highlighted", "fg:cyan bold"),
    ("selected", "fg:green"),
    ("separator", "fg:gray"),
    ("instruction", "fg:gray"),
])

# Number of versions offered in interactive mode
MAX_CHOICES = 15


class InstallCommand(Command):
    """Installs Node.js into a project."""

    def __init__(
        self,
        downloader: Optional[Downloader] = None,
        runner: Optional[CommandRunner] = None,
        fetch: Optional[Callable[[str], str]] = None,
        environment: Optional[Environment] = None,
    ) -> None:
        """Initialize InstallCommand.

        Args:
            downloader: Download/extract facility (default: HTTPS downloader).
            runner: Command runner used for global Node.js discovery.
            fetch: Fetches the version listing page.
            environment: Host environment; detected when omitted.
        """
        self._downloader = downloader
        self._runner = runner
        self._fetch = fetch
        self._environment = environment

    @property
    def name(self) -> str:
        """Command identifier."""
        return "install"

    def execute(self, args: Namespace, config: "InstallerConfig | None" = None) -> int:
        """Execute the install command.

        Args:
            args: Parsed command-line arguments.
            config: nodejs-installer configuration.

        Returns:
            Exit code.
        """
        config = config or InstallerConfig()
        project_root = Path(args.path).resolve()

        if not project_root.is_dir():
            print(f"Error: {project_root} is not a directory")
            return EXIT_INVALID_USAGE

        paths = ProjectPaths(project_root, config.vendor_dir)
        discovery = NodeDiscovery(runner=self._runner, environment=self._environment)
        generator = BinScriptGenerator(paths, discovery, environment=self._environment)
        constraint = config.version

        if not config.force_local:
            global_version = discovery.global_install_version()
            if satisfies(global_version, constraint):
                print(f"Using global NodeJS v{global_version}")
                generator.create_bin_scripts(config.bin_dir, config.target_dir, is_local=False)
                return EXIT_SUCCESS
            if global_version:
                LOGGER.info(
                    f"Global NodeJS v{global_version} does not match {constraint!r}, "
                    "installing locally"
                )

        if self._downloader is not None:
            return self._install_locally(args, config, paths, generator, self._downloader)

        with DistributionDownloader(timeout=config.timeout) as downloader:
            return self._install_locally(args, config, paths, generator, downloader)

    def _install_locally(
        self,
        args: Namespace,
        config: InstallerConfig,
        paths: ProjectPaths,
        generator: BinScriptGenerator,
        downloader: Downloader,
    ) -> int:
        constraint = config.version
        installer = Installer(
            paths,
            downloader=downloader,
            package_name=config.package_name,
            target_dir=config.target_dir,
            dist_url=config.dist_url,
            environment=self._environment,
        )
        installer.check_target_dir()
        generator.check_local_layout(config.bin_dir, config.target_dir)

        installed = installer.installed_version()
        interactive = getattr(args, "interactive", False)
        if not interactive and not is_exact_version(constraint) and satisfies(installed, constraint):
            print(f"NodeJS v{installed} is already installed")
        else:
            version = self._resolve_version(constraint, config, interactive)
            if version is None:
                print("Aborted.")
                return EXIT_SUCCESS

            package = installer.install(version)
            if package is None:
                print(f"NodeJS v{version} is already installed")
            else:
                print(f"Installed NodeJS v{package.normalized_version}")

        generator.create_bin_scripts(config.bin_dir, config.target_dir, is_local=True)
        return EXIT_SUCCESS

    def _resolve_version(
        self,
        constraint: str,
        config: InstallerConfig,
        interactive: bool,
    ) -> Optional[str]:
        """Turn a constraint into a concrete version.

        Returns:
            The version to install, or None if the user aborted.
        """
        if is_exact_version(constraint) and not interactive:
            return normalize_version(constraint)

        lister = VersionLister(
            config.dist_url,
            fetch=self._fetch or partial(fetch_text, timeout=config.timeout),
        )

        if not interactive:
            version = lister.latest_matching(constraint)
            LOGGER.info(f"Resolved {constraint!r} to v{version}")
            return version

        matches = matching_versions(constraint, lister.list_versions())
        if not matches:
            raise ConfigurationError(f"No Node.js version matches constraint {constraint!r}")

        return questionary.select(
            "Which Node.js version should be installed?",
            choices=matches[:MAX_CHOICES],
            default=matches[0],
            style=STYLE,
        ).ask()
