"""Command execution abstraction.

Shelling out (``which``, ``where``, ``node -v``) goes through a
:class:`CommandRunner` so callers can be tested with a fake runner instead
of spawning real processes.
"""

from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from nodejs_installer.core.logging import get_logger

LOGGER = get_logger(__name__)

# Exit code reported when the executable itself could not be started
EXIT_COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single command invocation."""

    returncode: int
    stdout: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(ABC):
    """Runs a command and captures its standard output."""

    @abstractmethod
    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        """Run a command.

        Args:
            args: Program and arguments.
            cwd: Working directory for the child process only.

        Returns:
            CommandResult with exit code and captured stdout.
        """


class SubprocessRunner(CommandRunner):
    """CommandRunner backed by :func:`subprocess.run`."""

    def __init__(self, timeout: int = 30) -> None:
        self._timeout = timeout

    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        LOGGER.debug(f"Running: {' '.join(args)}")
        try:
            result = subprocess.run(
                list(args),
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except (subprocess.SubprocessError, FileNotFoundError, OSError) as e:
            LOGGER.debug(f"Command {args[0]} could not be run: {e}")
            return CommandResult(returncode=EXIT_COMMAND_NOT_FOUND)

        return CommandResult(returncode=result.returncode, stdout=result.stdout)
