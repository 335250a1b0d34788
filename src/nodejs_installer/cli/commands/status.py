"""Status command implementation."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import Optional

from nodejs_installer.bootstrap.paths import ProjectPaths
from nodejs_installer.bootstrap.platform import Environment, get_environment
from nodejs_installer.bootstrap.validation import ToolStatus, validate_bin_scripts
from nodejs_installer.cli.commands import Command
from nodejs_installer.cli.exit_codes import EXIT_SUCCESS
from nodejs_installer.config.models import InstallerConfig
from nodejs_installer.core.runner import CommandRunner
from nodejs_installer.nodejs.bin_scripts import BinScriptGenerator
from nodejs_installer.nodejs.discovery import NodeDiscovery
from nodejs_installer.nodejs.installer import Installer


class StatusCommand(Command):
    """Shows platform, installed Node.js and wrapper script status."""

    def __init__(
        self,
        version: str,
        runner: Optional[CommandRunner] = None,
        environment: Optional[Environment] = None,
    ) -> None:
        """Initialize StatusCommand.

        Args:
            version: Current nodejs-installer version string.
            runner: Command runner used for global Node.js discovery.
            environment: Host environment; detected when omitted.
        """
        self._version = version
        self._runner = runner
        self._environment = environment

    @property
    def name(self) -> str:
        """Command identifier."""
        return "status"

    def execute(self, args: Namespace, config: "InstallerConfig | None" = None) -> int:
        config = config or InstallerConfig()
        project_root = Path(args.path).resolve()
        environment = self._environment or get_environment()

        paths = ProjectPaths(project_root, config.vendor_dir)
        installer = Installer(
            paths,
            downloader=None,
            package_name=config.package_name,
            target_dir=config.target_dir,
            dist_url=config.dist_url,
            environment=environment,
        )
        discovery = NodeDiscovery(runner=self._runner, environment=environment)
        generator = BinScriptGenerator(paths, discovery, environment=environment)

        print(f"nodejs-installer version: {self._version}")
        print(f"Platform: {environment.os_label}-{environment.arch_label}")
        print(f"Version constraint: {config.version}")
        print()

        installed = installer.installed_version()
        print(f"Local NodeJS: {f'v{installed}' if installed else 'not installed'}")
        print(f"  Runtime directory: {installer.runtime_dir}")
        print(f"  Module directory: {paths.modules_dir}")

        global_version = discovery.global_install_version()
        print(f"Global NodeJS: {f'v{global_version}' if global_version else 'not found'}")
        print()

        bin_dir = paths.resolve(config.bin_dir)
        result = validate_bin_scripts(bin_dir, generator.script_names())
        print(f"Wrapper scripts ({bin_dir}):")
        for name, status in result.statuses.items():
            label = "ok" if status == ToolStatus.PRESENT else status.value.replace("_", " ")
            print(f"  {name}: {label}")

        return EXIT_SUCCESS
