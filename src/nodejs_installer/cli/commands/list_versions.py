"""List versions command implementation."""

from __future__ import annotations

from argparse import Namespace
from functools import partial
from typing import TYPE_CHECKING, Callable, Optional

from nodejs_installer.bootstrap.download import fetch_text
from nodejs_installer.bootstrap.versions import matching_versions
from nodejs_installer.cli.commands import Command
from nodejs_installer.cli.exit_codes import EXIT_SUCCESS
from nodejs_installer.core.exceptions import ConfigurationError
from nodejs_installer.nodejs.lister import DEFAULT_DIST_URL, VersionLister

if TYPE_CHECKING:
    from nodejs_installer.config.models import InstallerConfig


class ListVersionsCommand(Command):
    """Lists Node.js versions published on the distribution server."""

    def __init__(self, fetch: Optional[Callable[[str], str]] = None) -> None:
        self._fetch = fetch

    @property
    def name(self) -> str:
        """Command identifier."""
        return "list-versions"

    def execute(self, args: Namespace, config: "InstallerConfig | None" = None) -> int:
        """Execute the list-versions command.

        Without a constraint, versions are printed in listing order. With a
        constraint, only matching versions are printed, highest first.

        Args:
            args: Parsed command-line arguments.
            config: Optional configuration (supplies dist_url and timeout).

        Returns:
            Exit code.
        """
        dist_url = config.dist_url if config else DEFAULT_DIST_URL
        timeout = config.timeout if config else 60
        lister = VersionLister(dist_url, fetch=self._fetch or partial(fetch_text, timeout=timeout))

        versions = lister.list_versions()
        if args.constraint:
            versions = matching_versions(args.constraint, versions)
            if not versions:
                raise ConfigurationError(
                    f"No Node.js version matches constraint {args.constraint!r}"
                )

        if args.latest:
            versions = versions[:1] if args.constraint else matching_versions("*", versions)[:1]

        for version in versions:
            print(version)

        return EXIT_SUCCESS
