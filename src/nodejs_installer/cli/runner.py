"""CLI runner: parses arguments, loads configuration and dispatches commands."""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from nodejs_installer.cli.arguments import build_parser
from nodejs_installer.cli.commands import (
    BinScriptsCommand,
    Command,
    InstallCommand,
    ListVersionsCommand,
    StatusCommand,
)
from nodejs_installer.cli.exit_codes import (
    EXIT_INSTALL_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NETWORK_FAILURE,
    EXIT_SUCCESS,
)
from nodejs_installer.config import load_config
from nodejs_installer.core.exceptions import (
    ConfigurationError,
    FetchError,
    InstallerError,
    ParseError,
)
from nodejs_installer.core.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)


def get_version() -> str:
    try:
        return version("nodejs-installer")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from nodejs_installer import __version__

        return __version__


def cli_args_to_config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Convert CLI arguments to config override dict.

    Only options explicitly given on the command line are included, so the
    config file keeps precedence over built-in defaults.

    Args:
        args: Parsed CLI arguments.

    Returns:
        Dictionary of config overrides.
    """
    overrides: Dict[str, Any] = {}

    if getattr(args, "dist_url", None):
        overrides["dist_url"] = args.dist_url
    if getattr(args, "node_version", None):
        overrides["version"] = args.node_version
    if getattr(args, "force_local", False):
        overrides["force_local"] = True
    if getattr(args, "target_dir", None):
        overrides["target_dir"] = args.target_dir
    if getattr(args, "bin_dir", None):
        overrides["bin_dir"] = args.bin_dir

    return overrides


class CLIRunner:
    """Runs nodejs-installer commands."""

    def __init__(self, commands: Optional[List[Command]] = None) -> None:
        self._parser = build_parser()
        if commands is None:
            commands = [
                InstallCommand(),
                ListVersionsCommand(),
                BinScriptsCommand(),
                StatusCommand(version=get_version()),
            ]
        self._commands = {command.name: command for command in commands}

    @property
    def parser(self) -> argparse.ArgumentParser:
        return self._parser

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Parse arguments and run the selected command.

        Args:
            argv: Command-line arguments (defaults to sys.argv).

        Returns:
            Exit code.
        """
        argv_list = list(argv) if argv is not None else None

        try:
            args = self._parser.parse_args(argv_list)
        except SystemExit as e:
            # --help exits with 0, usage errors with 2
            return EXIT_SUCCESS if e.code in (0, None) else EXIT_INVALID_USAGE

        # Configure logging as early as possible.
        configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)

        if args.version:
            print(get_version())
            return EXIT_SUCCESS

        if not args.command:
            self._parser.print_help()
            return EXIT_SUCCESS

        command = self._commands[args.command]
        project_root = Path(getattr(args, "path", ".")).resolve()

        try:
            config = load_config(
                project_root=project_root,
                cli_config_path=args.config,
                cli_overrides=cli_args_to_config_overrides(args),
            )
            return command.execute(args, config)
        except ConfigurationError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE
        except (FetchError, ParseError) as e:
            LOGGER.error(str(e))
            return EXIT_NETWORK_FAILURE
        except InstallerError as e:
            LOGGER.error(str(e))
            if args.debug:
                import traceback
                traceback.print_exc()
            return EXIT_INSTALL_FAILURE
