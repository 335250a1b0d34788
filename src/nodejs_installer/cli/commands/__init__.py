"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nodejs_installer.config.models import InstallerConfig


class Command(ABC):
    """Base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier.

        Returns:
            String name of the command, as typed on the command line.
        """

    @abstractmethod
    def execute(self, args: Namespace, config: "InstallerConfig | None" = None) -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.
            config: Optional nodejs-installer configuration.

        Returns:
            Exit code (0 for success, non-zero for error).
        """


# Import command implementations for convenience
# ruff: noqa: E402
from nodejs_installer.cli.commands.install import InstallCommand
from nodejs_installer.cli.commands.list_versions import ListVersionsCommand
from nodejs_installer.cli.commands.bin_scripts import BinScriptsCommand
from nodejs_installer.cli.commands.status import StatusCommand

__all__ = [
    "Command",
    "InstallCommand",
    "ListVersionsCommand",
    "BinScriptsCommand",
    "StatusCommand",
]
