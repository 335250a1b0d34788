"""Bin scripts command implementation."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import Optional

from nodejs_installer.bootstrap.paths import ProjectPaths
from nodejs_installer.bootstrap.platform import Environment
from nodejs_installer.cli.commands import Command
from nodejs_installer.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from nodejs_installer.config.models import InstallerConfig
from nodejs_installer.core.runner import CommandRunner
from nodejs_installer.nodejs.bin_scripts import BinScriptGenerator
from nodejs_installer.nodejs.discovery import NodeDiscovery


class BinScriptsCommand(Command):
    """(Re)creates the node/npm wrapper scripts."""

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        environment: Optional[Environment] = None,
    ) -> None:
        self._runner = runner
        self._environment = environment

    @property
    def name(self) -> str:
        """Command identifier."""
        return "bin-scripts"

    def execute(self, args: Namespace, config: "InstallerConfig | None" = None) -> int:
        config = config or InstallerConfig()
        project_root = Path(args.path).resolve()

        if not project_root.is_dir():
            print(f"Error: {project_root} is not a directory")
            return EXIT_INVALID_USAGE

        paths = ProjectPaths(project_root, config.vendor_dir)
        generator = BinScriptGenerator(
            paths,
            NodeDiscovery(runner=self._runner, environment=self._environment),
            environment=self._environment,
        )
        written = generator.create_bin_scripts(
            config.bin_dir, config.target_dir, is_local=not args.use_global
        )

        for script in written:
            print(f"  {script}")
        if not written:
            print("No wrapper scripts written.")

        return EXIT_SUCCESS
